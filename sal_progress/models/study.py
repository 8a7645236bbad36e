"""Vocabulary study view models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sal_progress.models.records import MasteryLevel


@dataclass(frozen=True)
class ReviewUpdate:
    """Fields a vocabulary collaborator should persist after a review.

    The engine never writes these back itself.
    """

    word_id: str | int
    review_count: int
    last_reviewed: datetime
    mastery_level: MasteryLevel
    next_review_date: datetime
    previous_mastery_level: MasteryLevel = MasteryLevel.NEW

    @property
    def promoted(self) -> bool:
        """True when this review moved the word up to mastered."""
        return (
            self.mastery_level == MasteryLevel.MASTERED
            and self.previous_mastery_level != MasteryLevel.MASTERED
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the collaborator's camelCase field names."""
        return {
            "id": self.word_id,
            "reviewCount": self.review_count,
            "lastReviewed": self.last_reviewed.isoformat(),
            "masteryLevel": self.mastery_level.value,
            "nextReviewDate": self.next_review_date.isoformat(),
        }


@dataclass
class StudyStats:
    """Study dashboard counters for a vocabulary library."""

    total_words: int = 0
    mastered_words: int = 0
    learning_words: int = 0
    familiar_words: int = 0
    new_words: int = 0
    total_reviews: int = 0
    mastery_percentage: int = 0
    words_this_week: int = 0
    words_to_review: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "total_words": self.total_words,
            "mastered_words": self.mastered_words,
            "learning_words": self.learning_words,
            "familiar_words": self.familiar_words,
            "new_words": self.new_words,
            "total_reviews": self.total_reviews,
            "mastery_percentage": self.mastery_percentage,
            "words_this_week": self.words_this_week,
            "words_to_review": self.words_to_review,
        }
