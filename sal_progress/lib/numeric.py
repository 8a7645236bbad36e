"""Numeric helpers shared by the scorers and calculators."""

from __future__ import annotations

import math
from collections.abc import Iterable


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up.

    Collaborators compute the same figures with JavaScript's Math.round,
    so Python's banker's rounding would disagree on exact halves.
    """
    return math.floor(value + 0.5)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, with a zero denominator treated as 1."""
    return numerator / (denominator or 1)


def average(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for an empty iterable."""
    items = list(values)
    if not items:
        return 0.0
    return sum(items) / len(items)
