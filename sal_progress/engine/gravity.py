"""
Gravity scoring.

Reduces a user's gravity items (self-identified limiting behaviors) to a
single 0-100 liability index. Higher is worse: 100 means every active item
sits at maximum severity. Improving and resolved items do not count.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from sal_progress.config.constants import GRAVITY_SEVERITY_MAX
from sal_progress.lib.numeric import clamp, round_half_up
from sal_progress.models.records import GravityItem, GravityStatus


class GravityScorer:
    """Scores active gravity items as a liability index."""

    def __init__(self, severity_max: int = GRAVITY_SEVERITY_MAX) -> None:
        self._severity_max = severity_max

    def score(self, items: Iterable[GravityItem]) -> int:
        """Score the active items.

        Args:
            items: Gravity items in any status

        Returns:
            round(sum(severity) / (active_count * max) * 100), 0 if none active
        """
        severities = [
            item.severity for item in items if item.status == GravityStatus.ACTIVE
        ]
        if not severities:
            return 0
        raw = sum(severities) / (len(severities) * self._severity_max) * 100
        return int(clamp(round_half_up(raw)))

    def score_by_category(self, items: Iterable[GravityItem]) -> dict[str, int]:
        """Score each category separately.

        Categories with no active items are omitted.
        """
        grouped: dict[str, list[GravityItem]] = defaultdict(list)
        for item in items:
            if item.status == GravityStatus.ACTIVE:
                grouped[item.category_id].append(item)
        return {category: self.score(group) for category, group in grouped.items()}
