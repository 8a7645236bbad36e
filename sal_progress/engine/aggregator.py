"""
Progress aggregation.

Folds the domain snapshots into one JourneyProgress:

1. Each domain snapshot is reduced independently by its calculator
2. overall_completion blends the five domain completions by COMPLETION_WEIGHTS
3. Streak and activity span come from StreakTracker over every domain's
   activity timestamps
4. Gravity, goals and arena ratings feed the growth trajectory

aggregate() is a pure function of its inputs plus the injected "now". A
missing or empty snapshot yields a zero-valued sub-progress, never an error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sal_progress.config.constants import (
    COMPLETION_WEIGHTS,
    DEFAULT_TASK_TOTAL,
    SAL_BOOKS,
    SalBook,
)
from sal_progress.engine.calculators import (
    calculate_books_progress,
    calculate_journal_progress,
    calculate_life_arenas_progress,
    calculate_overall_completion,
    calculate_tasks_progress,
    calculate_vocabulary_progress,
)
from sal_progress.engine.gravity import GravityScorer
from sal_progress.engine.streak import StreakTracker
from sal_progress.engine.trajectory import GrowthTrajectoryCalculator
from sal_progress.lib.timeutil import naive_utc
from sal_progress.models.progress import JourneyProgress
from sal_progress.models.records import (
    GravityItem,
    GrowthGoal,
    JournalEntry,
    LifeArena,
    ReadingProgress,
    SALTask,
    TasksVocabularyWord,
    VocabularyWord,
    WeeklyReview,
    parse_records,
)

logger = logging.getLogger(__name__)

# Snapshot key -> record model
DOMAIN_MODELS: dict[str, type] = {
    "journal": JournalEntry,
    "reading": ReadingProgress,
    "tasks": SALTask,
    "tasks_vocabulary": TasksVocabularyWord,
    "vocabulary": VocabularyWord,
    "arenas": LifeArena,
    "gravity": GravityItem,
    "goals": GrowthGoal,
    "reviews": WeeklyReview,
}


@dataclass(frozen=True)
class DomainSnapshots:
    """Parsed, read-only snapshots of every domain.

    degraded lists the domains whose provider failed or timed out; their
    snapshot is empty.
    """

    journal: Sequence[JournalEntry] = ()
    reading: Sequence[ReadingProgress] = ()
    tasks: Sequence[SALTask] = ()
    tasks_vocabulary: Sequence[TasksVocabularyWord] = ()
    vocabulary: Sequence[VocabularyWord] = ()
    arenas: Sequence[LifeArena] = ()
    gravity: Sequence[GravityItem] = ()
    goals: Sequence[GrowthGoal] = ()
    reviews: Sequence[WeeklyReview] = ()
    degraded: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_raw(
        cls,
        raw: Mapping[str, Any] | None,
        degraded: frozenset[str] | set[str] = frozenset(),
    ) -> DomainSnapshots:
        """Parse raw collaborator payloads keyed by domain.

        Unknown keys are ignored; missing keys become empty snapshots.
        """
        raw = raw or {}
        unknown = set(raw) - set(DOMAIN_MODELS)
        if unknown:
            logger.debug("Ignoring unknown snapshot domains: %s", sorted(unknown))
        parsed = {
            domain: tuple(parse_records(model, raw.get(domain)))
            for domain, model in DOMAIN_MODELS.items()
        }
        return cls(**parsed, degraded=frozenset(degraded))


def activity_timestamps(snapshots: DomainSnapshots) -> Iterator[datetime | None]:
    """Every timestamp that counts as activity, across all domains."""
    for entry in snapshots.journal:
        yield entry.date
    for chapter in snapshots.reading:
        yield chapter.last_read
    for task in snapshots.tasks:
        yield task.started_date
        yield task.completed_date
    for word in snapshots.tasks_vocabulary:
        yield word.date_added
    for word in snapshots.vocabulary:
        yield word.date_added
    for arena in snapshots.arenas:
        yield arena.last_updated


class ProgressAggregator:
    """Builds JourneyProgress from domain snapshots.

    Usage:
        aggregator = ProgressAggregator()
        progress = aggregator.aggregate(snapshots, now=datetime.now(UTC))
    """

    def __init__(
        self,
        streak_tracker: StreakTracker | None = None,
        gravity_scorer: GravityScorer | None = None,
        trajectory_calculator: GrowthTrajectoryCalculator | None = None,
        catalog: Sequence[SalBook] = SAL_BOOKS,
        total_tasks: int = DEFAULT_TASK_TOTAL,
        completion_weights: Mapping[str, float] = COMPLETION_WEIGHTS,
    ) -> None:
        self._streaks = streak_tracker or StreakTracker()
        self._gravity = gravity_scorer or GravityScorer()
        self._trajectory = trajectory_calculator or GrowthTrajectoryCalculator()
        self._catalog = tuple(catalog)
        self._total_tasks = total_tasks
        self._weights = completion_weights

    def aggregate(
        self,
        snapshots: DomainSnapshots | Mapping[str, Any] | None,
        now: datetime,
    ) -> JourneyProgress:
        """Aggregate every domain into a JourneyProgress.

        Args:
            snapshots: Parsed DomainSnapshots, or raw payloads keyed by domain
            now: Reference time for the streak

        Returns:
            A fresh JourneyProgress
        """
        if not isinstance(snapshots, DomainSnapshots):
            snapshots = DomainSnapshots.from_raw(snapshots)

        journal = calculate_journal_progress(snapshots.journal)
        books = calculate_books_progress(snapshots.reading, self._catalog)
        tasks = calculate_tasks_progress(snapshots.tasks, self._total_tasks)
        vocabulary = calculate_vocabulary_progress(
            snapshots.tasks_vocabulary, snapshots.vocabulary
        )
        arenas = calculate_life_arenas_progress(snapshots.arenas)

        streak = self._streaks.compute_streak(
            activity_timestamps(snapshots), today=naive_utc(now)
        )

        overall = calculate_overall_completion(
            {
                "journal": journal.completion_percentage,
                "books": books.completion_percentage,
                "tasks": tasks.completion_percentage,
                "vocabulary": vocabulary.completion_percentage,
                "arenas": arenas.completion_percentage,
            },
            self._weights,
        )

        gravity_score = self._gravity.score(snapshots.gravity)
        growth = self._trajectory.trajectory(
            snapshots.goals,
            [arena.current_score for arena in snapshots.arenas],
            gravity_score,
        )
        stats = self._trajectory.growth_stats(
            snapshots.goals, snapshots.gravity, snapshots.reviews
        )

        if snapshots.degraded:
            logger.warning(
                "Aggregated with degraded domains: %s", sorted(snapshots.degraded)
            )

        return JourneyProgress(
            overall_completion=overall,
            start_date=streak.start_date,
            days_active=streak.days_active,
            current_streak=streak.current_streak,
            last_activity_date=streak.last_activity_date,
            books_progress=books,
            journal_progress=journal,
            tasks_progress=tasks,
            vocabulary_progress=vocabulary,
            life_arenas_progress=arenas,
            growth=growth,
            growth_stats=stats,
            degraded_domains=sorted(snapshots.degraded),
        )
