"""
Achievement evaluation.

Achievements are a fixed registry of declarative rules. Each rule is a
tagged record: an id, a predicate over JourneyProgress, the display payload,
and an accessor naming which timestamp in the progress record stands for
"date earned".

Evaluation is reactive: the full registry is re-evaluated on every call and
only rules that currently hold produce an achievement. There is no earned
log, so an achievement disappears if its triggering data is later deleted
and its date follows the underlying domain timestamp.

Sort order: date_earned descending, None dates last (treated as earliest),
equal dates in registry order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType

from sal_progress.lib.exceptions import ConfigurationError
from sal_progress.models.progress import Achievement, JourneyProgress

logger = logging.getLogger(__name__)

ACHIEVEMENT_THRESHOLDS: Mapping[str, int] = MappingProxyType({
    "first_entry_entries": 1,
    "vocab_master_words": 100,
    "first_book_books": 1,
    "week_streak_days": 7,
    "task_warrior_tasks": 10,
    "prolific_writer_pages": 50,
})


@dataclass(frozen=True)
class AchievementRule:
    """A declarative achievement rule."""

    id: str
    title: str
    description: str
    icon: str
    category: str
    predicate: Callable[[JourneyProgress], bool]
    earned_at: Callable[[JourneyProgress], datetime | None]

    def evaluate(self, progress: JourneyProgress) -> Achievement | None:
        """Build the achievement if the rule currently holds."""
        if not self.predicate(progress):
            return None
        return Achievement(
            id=self.id,
            title=self.title,
            description=self.description,
            icon=self.icon,
            category=self.category,
            date_earned=self.earned_at(progress),
        )


_T = ACHIEVEMENT_THRESHOLDS

ACHIEVEMENT_RULES: tuple[AchievementRule, ...] = (
    AchievementRule(
        id="first-entry",
        title="First Step",
        description="Wrote your first journal entry",
        icon="📝",
        category="journal",
        predicate=lambda p: p.journal_progress.entries_count >= _T["first_entry_entries"],
        earned_at=lambda p: p.journal_progress.last_entry_date,
    ),
    AchievementRule(
        id="vocab-master",
        title="Vocabulary Master",
        description="Learned 100 vocabulary words",
        icon="📚",
        category="vocabulary",
        predicate=lambda p: p.vocabulary_progress.total_words >= _T["vocab_master_words"],
        earned_at=lambda p: p.vocabulary_progress.last_word_added,
    ),
    AchievementRule(
        id="first-book",
        title="Book Completion",
        description="Completed your first SAL book",
        icon="🎓",
        category="reading",
        predicate=lambda p: p.books_progress.completed_books >= _T["first_book_books"],
        earned_at=lambda p: p.books_progress.last_read_date,
    ),
    AchievementRule(
        id="week-streak",
        title="Consistent Learner",
        description="7-day activity streak",
        icon="🔥",
        category="consistency",
        predicate=lambda p: p.current_streak >= _T["week_streak_days"],
        earned_at=lambda p: p.last_activity_date,
    ),
    AchievementRule(
        id="task-warrior",
        title="Task Warrior",
        description="Completed 10 SAL Challenge tasks",
        icon="⚡",
        category="tasks",
        predicate=lambda p: p.tasks_progress.completed_tasks >= _T["task_warrior_tasks"],
        earned_at=lambda p: p.tasks_progress.last_task_update,
    ),
    AchievementRule(
        id="prolific-writer",
        title="Prolific Writer",
        description="Wrote 50 pages in your journal",
        icon="✍️",
        category="journal",
        predicate=lambda p: p.journal_progress.pages_written >= _T["prolific_writer_pages"],
        earned_at=lambda p: p.journal_progress.last_entry_date,
    ),
)


def _sort_key(achievement: Achievement) -> tuple[int, datetime]:
    # None sorts as earliest; reverse=True then puts it last
    if achievement.date_earned is None:
        return (0, datetime.min)
    return (1, achievement.date_earned)


class AchievementEvaluator:
    """Evaluates the achievement registry against a progress snapshot.

    Usage:
        evaluator = AchievementEvaluator()
        earned = evaluator.evaluate(progress)
    """

    def __init__(self, rules: Sequence[AchievementRule] = ACHIEVEMENT_RULES) -> None:
        ids = [rule.id for rule in rules]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate achievement ids: {duplicates}")
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[AchievementRule, ...]:
        return self._rules

    def evaluate(self, progress: JourneyProgress) -> list[Achievement]:
        """Evaluate every rule.

        Args:
            progress: Aggregated journey progress

        Returns:
            Currently earned achievements, newest first
        """
        earned = [
            achievement
            for rule in self._rules
            if (achievement := rule.evaluate(progress)) is not None
        ]
        # sorted() is stable, so equal dates keep registry order
        earned.sort(key=_sort_key, reverse=True)
        logger.debug("Evaluated %d rules, %d earned", len(self._rules), len(earned))
        return earned
