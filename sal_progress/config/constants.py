"""
Static configuration tables for the SAL progress engine.

Weights and targets live here as named tables so that each one can be
tested and tuned without touching the calculators that read them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class SalBook:
    """A book in the SAL reading catalog."""

    id: str
    title: str
    total_chapters: int


SAL_BOOKS: tuple[SalBook, ...] = (
    SalBook("book-1", "Life Leadership & Education", 5),
    SalBook("book-2", "Change, Growth & Freedom", 12),
    SalBook("book-3", "SAL Philosophy", 7),
    SalBook("book-4", "SAL Theory", 21),
    SalBook("book-5", "SAL Model", 9),
    SalBook("book-6", "Success Stories", 12),
    SalBook("book-7", "Pedagogy", 10),
    SalBook("book-8", "Sovereignty", 5),
)

# Total number of SAL challenge tasks
DEFAULT_TASK_TOTAL = 25

JOURNAL_TARGET_PAGES = 200
WORDS_PER_JOURNAL_PAGE = 250

# Vocabulary size counted as 100% complete
VOCABULARY_TARGET_WORDS = 100

# Arena ratings are on a 1-10 scale
ARENA_SCORE_MAX = 10

GRAVITY_SEVERITY_MAX = 5

# Per-domain share of overall completion
COMPLETION_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "journal": 0.2,
    "books": 0.2,
    "tasks": 0.2,
    "vocabulary": 0.2,
    "arenas": 0.2,
})

# Inverted gravity: lower liability raises the trajectory
TRAJECTORY_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "arenas": 0.4,
    "goals": 0.3,
    "gravity": 0.3,
})

REVIEW_INTERVAL_DAYS = 7

# Intervals for the mastery-based review policy
MASTERY_REVIEW_DAYS: Mapping[str, int] = MappingProxyType({
    "new": 1,
    "learning": 3,
    "familiar": 7,
    "mastered": 21,
})

# Promotion to mastered: an easy review after enough prior reviews
MASTERY_MAX_DIFFICULTY = 2
MASTERY_MIN_PRIOR_REVIEWS = 3

STUDY_BATCH_SIZE = 10

# Window for "words reviewed this week"
RECENT_REVIEW_DAYS = 7
