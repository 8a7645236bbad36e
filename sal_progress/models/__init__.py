"""
Models package for the SAL progress engine.

- records.py: Read-only domain snapshot records (pydantic)
- progress.py: JourneyProgress and per-domain sub-progress views
- growth.py: Growth trajectory and statistics views
- study.py: Vocabulary review and study views
"""

from __future__ import annotations

from .growth import GrowthStats, GrowthTrajectory
from .progress import (
    Achievement,
    BooksProgress,
    JournalProgress,
    JourneyProgress,
    LifeArenasProgress,
    TasksProgress,
    VocabularyProgress,
)
from .records import (
    ArenaMilestone,
    DomainRecord,
    GoalStatus,
    GravityItem,
    GravityStatus,
    GrowthGoal,
    JournalEntry,
    LifeArena,
    MasteryLevel,
    ReadingProgress,
    SALTask,
    TaskStatus,
    TasksVocabularyWord,
    VocabularyWord,
    WeeklyReview,
    parse_records,
)
from .study import ReviewUpdate, StudyStats

__all__ = [
    # Records
    "DomainRecord",
    "JournalEntry",
    "ReadingProgress",
    "SALTask",
    "TaskStatus",
    "TasksVocabularyWord",
    "VocabularyWord",
    "MasteryLevel",
    "LifeArena",
    "ArenaMilestone",
    "GravityItem",
    "GravityStatus",
    "GrowthGoal",
    "GoalStatus",
    "WeeklyReview",
    "parse_records",
    # Progress
    "JourneyProgress",
    "JournalProgress",
    "BooksProgress",
    "TasksProgress",
    "VocabularyProgress",
    "LifeArenasProgress",
    "Achievement",
    # Growth
    "GrowthTrajectory",
    "GrowthStats",
    # Study
    "ReviewUpdate",
    "StudyStats",
]
