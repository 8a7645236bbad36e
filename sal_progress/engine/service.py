"""
Growth Engine facade.

Wires the snapshot collector, aggregator, achievement evaluator, level
recommender and spaced-repetition scheduler behind one object that
presentation and persistence layers can call:

- aggregate / evaluate_achievements / recommend_level / due_words are
  synchronous and pure over their inputs
- collect / build_report fetch fresh snapshots from the injected providers

The engine never mutates domain records and keeps no state between calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import structlog

from sal_progress.config.settings import EngineSettings
from sal_progress.engine.achievements import AchievementEvaluator
from sal_progress.engine.aggregator import DomainSnapshots, ProgressAggregator
from sal_progress.engine.levels import (
    EXISTENTIAL_LEVELS,
    ExistentialLevel,
    LevelMetrics,
    LevelRecommender,
)
from sal_progress.engine.repetition import (
    FixedIntervalPolicy,
    ReviewIntervalPolicy,
    SpacedRepetitionScheduler,
)
from sal_progress.models.progress import Achievement, JourneyProgress
from sal_progress.models.records import VocabularyWord
from sal_progress.models.study import ReviewUpdate, StudyStats
from sal_progress.providers.collector import SnapshotCollector
from sal_progress.providers.protocol import SnapshotProvider

logger = structlog.get_logger(__name__)


@dataclass
class GrowthReport:
    """Everything a dashboard needs from one snapshot collection."""

    progress: JourneyProgress
    achievements: list[Achievement] = field(default_factory=list)
    recommended_level: int = 1
    recommended_level_info: ExistentialLevel | None = None
    next_level_requirements: list[str] = field(default_factory=list)
    words_due: list[VocabularyWord] = field(default_factory=list)
    study_queue: list[VocabularyWord] = field(default_factory=list)
    study_stats: StudyStats = field(default_factory=StudyStats)
    generated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "progress": self.progress.to_dict(),
            "achievements": [a.to_dict() for a in self.achievements],
            "recommended_level": self.recommended_level,
            "recommended_level_info": (
                self.recommended_level_info.to_dict()
                if self.recommended_level_info else None
            ),
            "next_level_requirements": list(self.next_level_requirements),
            "words_due": [w.model_dump(mode="json", by_alias=True) for w in self.words_due],
            "study_queue": [
                w.model_dump(mode="json", by_alias=True) for w in self.study_queue
            ],
            "study_stats": self.study_stats.to_dict(),
            "generated_at": self.generated_at.isoformat() if self.generated_at else None,
        }


class GrowthEngine:
    """Progress & growth aggregation engine.

    Usage:
        engine = GrowthEngine(providers={"journal": journal_service, ...})
        report = await engine.build_report(now=datetime.now(UTC))
    """

    def __init__(
        self,
        providers: Mapping[str, SnapshotProvider] | None = None,
        settings: EngineSettings | None = None,
        aggregator: ProgressAggregator | None = None,
        evaluator: AchievementEvaluator | None = None,
        recommender: LevelRecommender | None = None,
        review_policy: ReviewIntervalPolicy | None = None,
    ) -> None:
        self._settings = settings or EngineSettings.from_env()
        self._collector = SnapshotCollector(
            providers or {}, timeout=self._settings.snapshot_timeout
        )
        self._aggregator = aggregator or ProgressAggregator()
        self._evaluator = evaluator or AchievementEvaluator()
        self._recommender = recommender or LevelRecommender()
        self._scheduler = SpacedRepetitionScheduler(
            policy=review_policy
            or FixedIntervalPolicy(days=self._settings.review_interval_days),
            batch_size=self._settings.study_batch_size,
        )

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def scheduler(self) -> SpacedRepetitionScheduler:
        return self._scheduler

    # -- pure operations ---------------------------------------------------

    def aggregate(
        self,
        snapshots: DomainSnapshots | Mapping[str, Any] | None,
        now: datetime,
    ) -> JourneyProgress:
        """Aggregate snapshots into a JourneyProgress."""
        return self._aggregator.aggregate(snapshots, now)

    def evaluate_achievements(self, progress: JourneyProgress) -> list[Achievement]:
        """Currently earned achievements, newest first."""
        return self._evaluator.evaluate(progress)

    def recommend_level(
        self,
        progress: JourneyProgress,
        levels: Sequence[ExistentialLevel] | None = None,
    ) -> int:
        """Recommend a ladder rung from aggregated progress.

        Args:
            progress: Aggregated journey progress
            levels: Alternative ladder; the configured one when None

        Raises:
            LevelLadderError: If an alternative ladder has gaps
        """
        recommender = (
            self._recommender if levels is None else LevelRecommender(levels)
        )
        return recommender.recommend(LevelMetrics.from_progress(progress))

    def due_words(
        self, words: Iterable[VocabularyWord], as_of: datetime
    ) -> list[VocabularyWord]:
        """Vocabulary words due for review at as_of."""
        return self._scheduler.due_words(words, as_of)

    def mark_reviewed(
        self, word: VocabularyWord, difficulty: int, now: datetime
    ) -> ReviewUpdate:
        """Fields to persist after reviewing a word."""
        return self._scheduler.mark_reviewed(word, difficulty, now)

    # -- snapshot-backed operations -----------------------------------------

    async def collect(self, now: datetime) -> JourneyProgress:
        """Fetch fresh snapshots and aggregate them."""
        snapshots = await self._collector.collect()
        return self._aggregator.aggregate(snapshots, now)

    async def build_report(self, now: datetime) -> GrowthReport:
        """Fetch fresh snapshots and derive every view from them."""
        snapshots = await self._collector.collect()
        progress = self._aggregator.aggregate(snapshots, now)

        metrics = LevelMetrics.from_progress(progress)
        level = self._recommender.recommend(metrics)
        gaps = self._recommender.next_level_gaps(metrics, level)

        report = GrowthReport(
            progress=progress,
            achievements=self._evaluator.evaluate(progress),
            recommended_level=level,
            recommended_level_info=self._recommender.level_info(level),
            next_level_requirements=[req.label for req in gaps],
            words_due=self._scheduler.due_words(snapshots.vocabulary, now),
            study_queue=self._scheduler.study_queue(snapshots.vocabulary, now),
            study_stats=self._scheduler.study_stats(snapshots.vocabulary, now),
            generated_at=now,
        )
        logger.info(
            "growth_report_built",
            level=level,
            achievements=len(report.achievements),
            words_due=len(report.words_due),
            degraded=progress.degraded_domains,
        )
        return report


# Module-level entry points for callers that do not need a facade.

_DEFAULT_AGGREGATOR = ProgressAggregator()
_DEFAULT_EVALUATOR = AchievementEvaluator()
_DEFAULT_SCHEDULER = SpacedRepetitionScheduler()


def aggregate(
    snapshots: DomainSnapshots | Mapping[str, Any] | None, now: datetime
) -> JourneyProgress:
    """Aggregate snapshots with the default configuration."""
    return _DEFAULT_AGGREGATOR.aggregate(snapshots, now)


def evaluate_achievements(progress: JourneyProgress) -> list[Achievement]:
    """Evaluate the default achievement registry."""
    return _DEFAULT_EVALUATOR.evaluate(progress)


def recommend_level(
    progress: JourneyProgress,
    levels: Sequence[ExistentialLevel] = EXISTENTIAL_LEVELS,
) -> int:
    """Recommend a rung of the given ladder from aggregated progress."""
    return LevelRecommender(levels).recommend(LevelMetrics.from_progress(progress))


def due_words(words: Iterable[VocabularyWord], as_of: datetime) -> list[VocabularyWord]:
    """Words due under the default 7-day interval."""
    return _DEFAULT_SCHEDULER.due_words(words, as_of)
