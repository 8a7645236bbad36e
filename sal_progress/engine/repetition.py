"""
Spaced-repetition scheduling for vocabulary words.

A word is due once its review interval has elapsed since it was last
reviewed (boundary inclusive). The interval comes from a pluggable policy:

- FixedIntervalPolicy: the same interval for every word (7 days default)
- MasteryIntervalPolicy: interval grows with the word's mastery level

A word that was never reviewed is measured from the day it was added; a
word with neither timestamp is due immediately.

Mastery promotion is one-way: a review promotes a word to "mastered" when
it was rated easy (difficulty <= 2) after at least 3 prior reviews.
Otherwise mastery is left unchanged; there is no automatic demotion.

The scheduler returns ReviewUpdate values; persisting them is the
vocabulary collaborator's job.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Protocol

from sal_progress.config.constants import (
    MASTERY_MAX_DIFFICULTY,
    MASTERY_MIN_PRIOR_REVIEWS,
    MASTERY_REVIEW_DAYS,
    RECENT_REVIEW_DAYS,
    REVIEW_INTERVAL_DAYS,
    STUDY_BATCH_SIZE,
)
from sal_progress.lib.exceptions import ValidationError
from sal_progress.lib.numeric import round_half_up, safe_ratio
from sal_progress.lib.timeutil import naive_utc
from sal_progress.models.records import MasteryLevel, VocabularyWord
from sal_progress.models.study import ReviewUpdate, StudyStats

logger = logging.getLogger(__name__)

DIFFICULTY_MIN = 1
DIFFICULTY_MAX = 5


class ReviewIntervalPolicy(Protocol):
    """Decides how long a word rests between reviews."""

    def interval_for(self, word: VocabularyWord) -> timedelta:
        ...


@dataclass(frozen=True)
class FixedIntervalPolicy:
    """Every word is reviewed on the same fixed interval."""

    days: int = REVIEW_INTERVAL_DAYS

    def interval_for(self, word: VocabularyWord) -> timedelta:
        return timedelta(days=self.days)


@dataclass(frozen=True)
class MasteryIntervalPolicy:
    """Interval lengthens as a word moves up the mastery levels."""

    days_by_level: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(dict(MASTERY_REVIEW_DAYS))
    )
    fallback_days: int = REVIEW_INTERVAL_DAYS

    def interval_for(self, word: VocabularyWord) -> timedelta:
        days = self.days_by_level.get(word.mastery_level.value, self.fallback_days)
        return timedelta(days=days)


class SpacedRepetitionScheduler:
    """Computes due dates, due sets and review updates for vocabulary.

    Usage:
        scheduler = SpacedRepetitionScheduler()
        due = scheduler.due_words(words, as_of=now)
        update = scheduler.mark_reviewed(due[0], difficulty=2, now=now)
    """

    def __init__(
        self,
        policy: ReviewIntervalPolicy | None = None,
        batch_size: int = STUDY_BATCH_SIZE,
    ) -> None:
        self._policy = policy or FixedIntervalPolicy()
        self._batch_size = batch_size

    @property
    def policy(self) -> ReviewIntervalPolicy:
        return self._policy

    @staticmethod
    def reference_time(word: VocabularyWord) -> datetime | None:
        """The timestamp the interval is measured from."""
        return word.last_reviewed or word.date_added

    def next_review_date(self, word: VocabularyWord) -> datetime | None:
        """When the word next becomes due; None means due now."""
        reference = self.reference_time(word)
        if reference is None:
            return None
        return reference + self._policy.interval_for(word)

    def is_due(self, word: VocabularyWord, as_of: datetime) -> bool:
        """True when the review interval has fully elapsed at as_of."""
        due_at = self.next_review_date(word)
        return due_at is None or due_at <= naive_utc(as_of)

    def due_words(
        self, words: Iterable[VocabularyWord], as_of: datetime
    ) -> list[VocabularyWord]:
        """Words due for review at as_of, in input order."""
        return [word for word in words if self.is_due(word, as_of)]

    def mark_reviewed(
        self, word: VocabularyWord, difficulty: int, now: datetime
    ) -> ReviewUpdate:
        """Apply one review to a word.

        Args:
            word: The reviewed word
            difficulty: Self-rated difficulty, 1 (easy) to 5 (hard)
            now: Review timestamp

        Returns:
            ReviewUpdate with the incremented count, new timestamp, mastery
            level and the next review date

        Raises:
            ValidationError: If difficulty is outside 1-5
        """
        if not DIFFICULTY_MIN <= difficulty <= DIFFICULTY_MAX:
            raise ValidationError(
                f"difficulty must be {DIFFICULTY_MIN}-{DIFFICULTY_MAX}, got {difficulty}"
            )
        reviewed_at = naive_utc(now)

        mastery = word.mastery_level
        if (
            difficulty <= MASTERY_MAX_DIFFICULTY
            and word.review_count >= MASTERY_MIN_PRIOR_REVIEWS
        ):
            mastery = MasteryLevel.MASTERED
            if word.mastery_level != MasteryLevel.MASTERED:
                logger.info("Word %r promoted to mastered", word.word)

        updated = word.model_copy(
            update={
                "review_count": word.review_count + 1,
                "last_reviewed": reviewed_at,
                "mastery_level": mastery,
            }
        )
        return ReviewUpdate(
            word_id=word.id,
            review_count=updated.review_count,
            last_reviewed=reviewed_at,
            mastery_level=mastery,
            next_review_date=reviewed_at + self._policy.interval_for(updated),
            previous_mastery_level=word.mastery_level,
        )

    def study_queue(
        self,
        words: Iterable[VocabularyWord],
        as_of: datetime,
        limit: int | None = None,
    ) -> list[VocabularyWord]:
        """Pick the words for a study session.

        Due words come first, most overdue first. When nothing is due the
        session falls back to the least recently reviewed words.
        """
        size = self._batch_size if limit is None else limit
        word_list = list(words)
        due = self.due_words(word_list, as_of)
        pool = due or word_list
        pool = sorted(pool, key=self._staleness_key)
        return pool[:size]

    def study_stats(
        self, words: Iterable[VocabularyWord], as_of: datetime
    ) -> StudyStats:
        """Dashboard counters for a vocabulary library."""
        word_list = list(words)
        reference = naive_utc(as_of)
        week_ago = reference - timedelta(days=RECENT_REVIEW_DAYS)

        def count(level: MasteryLevel) -> int:
            return sum(1 for w in word_list if w.mastery_level == level)

        mastered = count(MasteryLevel.MASTERED)
        return StudyStats(
            total_words=len(word_list),
            mastered_words=mastered,
            learning_words=count(MasteryLevel.LEARNING),
            familiar_words=count(MasteryLevel.FAMILIAR),
            new_words=count(MasteryLevel.NEW),
            total_reviews=sum(w.review_count for w in word_list),
            mastery_percentage=round_half_up(safe_ratio(mastered, len(word_list)) * 100),
            words_this_week=sum(
                1 for w in word_list
                if w.last_reviewed is not None and w.last_reviewed > week_ago
            ),
            words_to_review=len(self.due_words(word_list, reference)),
        )

    def _staleness_key(self, word: VocabularyWord) -> tuple[int, datetime]:
        due_at = self.next_review_date(word)
        if due_at is None:
            return (0, datetime.min)
        return (1, due_at)
