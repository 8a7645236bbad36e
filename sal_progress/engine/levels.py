"""
Existential level ladder and recommendation.

The ladder is nine ordered developmental rungs. Each rung declares the
minimum counters it needs (completed books, journal entries, trajectory,
completed tasks; the subset varies per rung). The recommended level is the
highest rung whose requirements are ALL met, defaulting to 1.

Rungs are not nested: meeting rung k does not imply meeting rung k-1 (rung
8 needs no books, rung 7 needs eight), so every rung is evaluated and the
maximum satisfied index wins. Because every requirement is a lower bound,
raising any counter never lowers the recommendation.

The ladder is data. Adding or editing a rung means editing
EXISTENTIAL_LEVELS, not the recommender.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from sal_progress.lib.exceptions import LevelLadderError
from sal_progress.models.progress import JourneyProgress

logger = logging.getLogger(__name__)


class LevelMetric(StrEnum):
    """Counters a rung can gate on (values are LevelMetrics attributes)."""

    COMPLETED_BOOKS = "completed_books"
    JOURNAL_COUNT = "journal_count"
    TRAJECTORY = "trajectory"
    COMPLETED_TASKS = "completed_tasks"


_METRIC_LABELS: dict[LevelMetric, str] = {
    LevelMetric.COMPLETED_BOOKS: "Complete {n} SAL book(s)",
    LevelMetric.JOURNAL_COUNT: "Write {n} journal entries",
    LevelMetric.TRAJECTORY: "Reach a growth trajectory of {n}%",
    LevelMetric.COMPLETED_TASKS: "Complete {n} SAL challenge tasks",
}


@dataclass(frozen=True)
class LevelMetrics:
    """The counters a level recommendation is based on."""

    trajectory: int = 0
    completed_books: int = 0
    journal_count: int = 0
    completed_tasks: int = 0

    @classmethod
    def from_progress(cls, progress: JourneyProgress) -> LevelMetrics:
        """Read the counters from an aggregated JourneyProgress."""
        return cls(
            trajectory=progress.growth.trajectory,
            completed_books=progress.books_progress.completed_books,
            journal_count=progress.journal_progress.entries_count,
            completed_tasks=progress.tasks_progress.completed_tasks,
        )


@dataclass(frozen=True)
class LevelRequirement:
    """A lower bound on one metric."""

    metric: LevelMetric
    minimum: int

    def is_met(self, metrics: LevelMetrics) -> bool:
        return getattr(metrics, self.metric.value) >= self.minimum

    @property
    def label(self) -> str:
        return _METRIC_LABELS[self.metric].format(n=self.minimum)


@dataclass(frozen=True)
class ExistentialLevel:
    """A rung on the existential ladder. Static configuration."""

    level: int
    name: str
    description: str = ""
    focus: str = ""
    requirements: tuple[LevelRequirement, ...] = ()

    def is_satisfied(self, metrics: LevelMetrics) -> bool:
        """True when every requirement of this rung is met."""
        return all(req.is_met(metrics) for req in self.requirements)

    def unmet(self, metrics: LevelMetrics) -> list[LevelRequirement]:
        """Requirements of this rung not yet met."""
        return [req for req in self.requirements if not req.is_met(metrics)]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "level": self.level,
            "name": self.name,
            "description": self.description,
            "focus": self.focus,
            "requirements": [req.label for req in self.requirements],
        }


def _req(**minimums: int) -> tuple[LevelRequirement, ...]:
    return tuple(LevelRequirement(LevelMetric(k), v) for k, v in minimums.items())


EXISTENTIAL_LEVELS: tuple[ExistentialLevel, ...] = (
    ExistentialLevel(
        1, "Survival",
        "Reacting to circumstances; the journey has just begun.",
        "Start journaling and open the first SAL book",
    ),
    ExistentialLevel(
        2, "Awareness",
        "Noticing patterns and naming the gravity that holds you back.",
        "Build a reflective habit",
        _req(completed_books=1, journal_count=10),
    ),
    ExistentialLevel(
        3, "Inquiry",
        "Questioning inherited beliefs through study and reflection.",
        "Deepen study across the SAL library",
        _req(completed_books=3, journal_count=30, trajectory=40),
    ),
    ExistentialLevel(
        4, "Discipline",
        "Acting consistently on chosen principles.",
        "Sustain daily practice",
        _req(completed_books=5, journal_count=100, trajectory=60),
    ),
    ExistentialLevel(
        5, "Contribution",
        "Turning personal growth into service.",
        "Complete the SAL challenge tasks",
        _req(completed_books=6, trajectory=70, completed_tasks=15),
    ),
    ExistentialLevel(
        6, "Mastery",
        "Integrating knowledge into every life arena.",
        "Balance all life arenas",
        _req(completed_books=7, trajectory=80, completed_tasks=20),
    ),
    ExistentialLevel(
        7, "Leadership",
        "Guiding others by example.",
        "Teach what you have learned",
        _req(completed_books=8, trajectory=85, completed_tasks=23),
    ),
    ExistentialLevel(
        8, "Sovereignty",
        "Self-governed and free of the old gravity.",
        "Live by your own constitution",
        _req(trajectory=90, completed_tasks=25),
    ),
    ExistentialLevel(
        9, "Transcendence",
        "Growth as a way of being.",
        "Sustain and share the trajectory",
        _req(trajectory=95),
    ),
)


def validate_ladder(levels: Iterable[ExistentialLevel]) -> tuple[ExistentialLevel, ...]:
    """Check a ladder is numbered 1..n without gaps or duplicates.

    Args:
        levels: Ladder rungs in any order

    Returns:
        The rungs sorted by level

    Raises:
        LevelLadderError: If the ladder is empty, has gaps, or repeats a level
    """
    ordered = tuple(sorted(levels, key=lambda lvl: lvl.level))
    if not ordered:
        raise LevelLadderError("Level ladder is empty")
    numbers = [lvl.level for lvl in ordered]
    expected = list(range(1, len(ordered) + 1))
    if numbers != expected:
        raise LevelLadderError(
            f"Level ladder must be numbered 1..{len(ordered)} without gaps, "
            f"got {numbers}"
        )
    return ordered


class LevelRecommender:
    """Recommends the highest ladder rung whose requirements are met.

    Usage:
        recommender = LevelRecommender()
        level = recommender.recommend_level(
            trajectory=72, completed_books=6, journal_count=40, completed_tasks=16,
        )
    """

    def __init__(self, levels: Sequence[ExistentialLevel] = EXISTENTIAL_LEVELS) -> None:
        self._levels = validate_ladder(levels)

    @property
    def levels(self) -> tuple[ExistentialLevel, ...]:
        return self._levels

    def recommend_level(
        self,
        trajectory: int,
        completed_books: int,
        journal_count: int,
        completed_tasks: int,
    ) -> int:
        """Recommend a level from the raw counters.

        Returns:
            The highest satisfied level number, 1 when none is satisfied
        """
        return self.recommend(
            LevelMetrics(
                trajectory=trajectory,
                completed_books=completed_books,
                journal_count=journal_count,
                completed_tasks=completed_tasks,
            )
        )

    def recommend(self, metrics: LevelMetrics) -> int:
        """Recommend a level from a LevelMetrics bundle."""
        satisfied = [lvl.level for lvl in self._levels if lvl.is_satisfied(metrics)]
        recommended = max(satisfied, default=1)
        logger.debug("Recommended level %d for %s", recommended, metrics)
        return recommended

    def level_info(self, level: int) -> ExistentialLevel | None:
        """Look up a rung by number."""
        if 1 <= level <= len(self._levels):
            return self._levels[level - 1]
        return None

    def next_level_gaps(
        self, metrics: LevelMetrics, current_level: int
    ) -> list[LevelRequirement]:
        """Unmet requirements of the rung above current_level.

        Returns an empty list at the top of the ladder.
        """
        nxt = self.level_info(current_level + 1)
        if nxt is None:
            return []
        return nxt.unmet(metrics)
