"""
Derived progress view models.

JourneyProgress is recomputed on every aggregation and never persisted by
the engine. Each domain contributes one sub-progress record; an empty or
missing snapshot yields the zero-valued default of that record.

Invariants (enforced by the calculators that build these):
- every *_percentage field is in [0, 100]
- every count is >= 0
- overall_completion is a fraction in [0, 1]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sal_progress.config.constants import DEFAULT_TASK_TOTAL, JOURNAL_TARGET_PAGES
from sal_progress.models.growth import GrowthStats, GrowthTrajectory


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class JournalProgress:
    """Journal writing totals."""

    pages_written: int = 0
    target_pages: int = JOURNAL_TARGET_PAGES
    entries_count: int = 0
    total_words: int = 0
    average_words_per_entry: int = 0
    last_entry_date: datetime | None = None
    entries_by_type: dict[str, int] = field(default_factory=dict)
    completion_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "pages_written": self.pages_written,
            "target_pages": self.target_pages,
            "entries_count": self.entries_count,
            "total_words": self.total_words,
            "average_words_per_entry": self.average_words_per_entry,
            "last_entry_date": _iso(self.last_entry_date),
            "entries_by_type": dict(self.entries_by_type),
            "completion_percentage": self.completion_percentage,
        }


@dataclass
class BooksProgress:
    """SAL book reading totals."""

    total_books: int = 0
    completed_books: int = 0
    current_book_id: str | None = None
    chapters_completed: int = 0
    total_chapters: int = 0
    total_reading_time: int = 0  # seconds
    average_reading_time: int = 0
    last_read_date: datetime | None = None
    books_in_progress: int = 0
    completion_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "total_books": self.total_books,
            "completed_books": self.completed_books,
            "current_book_id": self.current_book_id,
            "chapters_completed": self.chapters_completed,
            "total_chapters": self.total_chapters,
            "total_reading_time": self.total_reading_time,
            "average_reading_time": self.average_reading_time,
            "last_read_date": _iso(self.last_read_date),
            "books_in_progress": self.books_in_progress,
            "completion_percentage": self.completion_percentage,
        }


@dataclass
class TasksProgress:
    """SAL challenge task totals."""

    completed_tasks: int = 0
    total_tasks: int = DEFAULT_TASK_TOTAL
    in_progress_tasks: int = 0
    total_time_spent: int = 0
    tasks_by_category: dict[str, int] = field(default_factory=dict)
    tasks_by_status: dict[str, int] = field(default_factory=dict)
    average_time_per_task: int = 0
    last_task_update: datetime | None = None
    completion_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "completed_tasks": self.completed_tasks,
            "total_tasks": self.total_tasks,
            "in_progress_tasks": self.in_progress_tasks,
            "total_time_spent": self.total_time_spent,
            "tasks_by_category": dict(self.tasks_by_category),
            "tasks_by_status": dict(self.tasks_by_status),
            "average_time_per_task": self.average_time_per_task,
            "last_task_update": _iso(self.last_task_update),
            "completion_percentage": self.completion_percentage,
        }


@dataclass
class VocabularyProgress:
    """Vocabulary collection totals across task and library word lists."""

    tasks_vocabulary: int = 0
    library_vocabulary: int = 0
    total_words: int = 0
    words_mastered: int = 0
    words_learning: int = 0
    words_familiar: int = 0
    words_new: int = 0
    average_review_count: int = 0
    last_word_added: datetime | None = None
    completion_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "tasks_vocabulary": self.tasks_vocabulary,
            "library_vocabulary": self.library_vocabulary,
            "total_words": self.total_words,
            "words_mastered": self.words_mastered,
            "words_learning": self.words_learning,
            "words_familiar": self.words_familiar,
            "words_new": self.words_new,
            "average_review_count": self.average_review_count,
            "last_word_added": _iso(self.last_word_added),
            "completion_percentage": self.completion_percentage,
        }


@dataclass
class LifeArenasProgress:
    """Life arena ratings and milestone totals."""

    overall_score: float = 0.0
    average_arena_score: float = 0.0
    highest_arena: str = "None"
    lowest_arena: str = "None"
    total_milestones: int = 0
    completed_milestones: int = 0
    arena_scores: dict[str, float] = field(default_factory=dict)
    last_arena_update: datetime | None = None
    completion_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "overall_score": self.overall_score,
            "average_arena_score": self.average_arena_score,
            "highest_arena": self.highest_arena,
            "lowest_arena": self.lowest_arena,
            "total_milestones": self.total_milestones,
            "completed_milestones": self.completed_milestones,
            "arena_scores": dict(self.arena_scores),
            "last_arena_update": _iso(self.last_arena_update),
            "completion_percentage": self.completion_percentage,
        }


@dataclass
class JourneyProgress:
    """Unified cross-domain progress snapshot.

    Recomputed on every call to aggregate(); the engine holds no state
    between calls. start_date and last_activity_date are None when no
    domain has recorded any activity.
    """

    overall_completion: float = 0.0  # 0.0 - 1.0
    start_date: datetime | None = None
    days_active: int = 0
    current_streak: int = 0
    last_activity_date: datetime | None = None
    books_progress: BooksProgress = field(default_factory=BooksProgress)
    journal_progress: JournalProgress = field(default_factory=JournalProgress)
    tasks_progress: TasksProgress = field(default_factory=TasksProgress)
    vocabulary_progress: VocabularyProgress = field(default_factory=VocabularyProgress)
    life_arenas_progress: LifeArenasProgress = field(default_factory=LifeArenasProgress)
    growth: GrowthTrajectory = field(default_factory=GrowthTrajectory)
    growth_stats: GrowthStats = field(default_factory=GrowthStats)
    degraded_domains: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "overall_completion": self.overall_completion,
            "start_date": _iso(self.start_date),
            "days_active": self.days_active,
            "current_streak": self.current_streak,
            "last_activity_date": _iso(self.last_activity_date),
            "books_progress": self.books_progress.to_dict(),
            "journal_progress": self.journal_progress.to_dict(),
            "tasks_progress": self.tasks_progress.to_dict(),
            "vocabulary_progress": self.vocabulary_progress.to_dict(),
            "life_arenas_progress": self.life_arenas_progress.to_dict(),
            "growth": self.growth.to_dict(),
            "growth_stats": self.growth_stats.to_dict(),
            "degraded_domains": list(self.degraded_domains),
        }


@dataclass
class Achievement:
    """An achievement earned for the current progress snapshot."""

    id: str
    title: str
    description: str
    icon: str
    category: str
    date_earned: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "category": self.category,
            "date_earned": _iso(self.date_earned),
        }
