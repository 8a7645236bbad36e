"""
Per-domain progress calculators.

Each calculator reduces one domain snapshot to its sub-progress record with
simple sums, ratios and max-over-dates. They are independent of each other
and total: an empty snapshot yields the zero-valued record, and every
ratio is guarded against an empty denominator.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

from sal_progress.config.constants import (
    ARENA_SCORE_MAX,
    COMPLETION_WEIGHTS,
    DEFAULT_TASK_TOTAL,
    JOURNAL_TARGET_PAGES,
    SAL_BOOKS,
    VOCABULARY_TARGET_WORDS,
    WORDS_PER_JOURNAL_PAGE,
    SalBook,
)
from sal_progress.lib.numeric import average, clamp, round_half_up, safe_ratio
from sal_progress.models.progress import (
    BooksProgress,
    JournalProgress,
    LifeArenasProgress,
    TasksProgress,
    VocabularyProgress,
)
from sal_progress.models.records import (
    JournalEntry,
    LifeArena,
    MasteryLevel,
    ReadingProgress,
    SALTask,
    TasksVocabularyWord,
    TaskStatus,
    VocabularyWord,
)


def latest(stamps: Iterable[datetime | None]) -> datetime | None:
    """Most recent non-None timestamp, or None."""
    return max((s for s in stamps if s is not None), default=None)


def percent(numerator: float, denominator: float) -> float:
    """Guarded percentage clamped to [0, 100], two decimals."""
    return round(clamp(safe_ratio(numerator, denominator) * 100), 2)


def journal_pages(total_words: int) -> int:
    """Pages written, one page per WORDS_PER_JOURNAL_PAGE words, rounded up."""
    return math.ceil(total_words / WORDS_PER_JOURNAL_PAGE)


def calculate_journal_progress(entries: Sequence[JournalEntry]) -> JournalProgress:
    """Reduce journal entries to JournalProgress."""
    total_words = sum(e.word_count for e in entries)
    pages = journal_pages(total_words)
    return JournalProgress(
        pages_written=pages,
        target_pages=JOURNAL_TARGET_PAGES,
        entries_count=len(entries),
        total_words=total_words,
        average_words_per_entry=round_half_up(average(e.word_count for e in entries)),
        last_entry_date=latest(e.date for e in entries),
        entries_by_type=dict(Counter(e.type for e in entries)),
        completion_percentage=percent(pages, JOURNAL_TARGET_PAGES),
    )


def calculate_books_progress(
    records: Sequence[ReadingProgress],
    catalog: Sequence[SalBook] = SAL_BOOKS,
) -> BooksProgress:
    """Reduce chapter reading records to BooksProgress.

    A book counts as completed when every chapter in the catalog has a
    completed record. Chapters are counted once even if reported twice.
    """
    completed_chapters = {(r.book_id, r.chapter_id) for r in records if r.completed}
    per_book = Counter(book_id for book_id, _ in completed_chapters)
    total_chapters = sum(book.total_chapters for book in catalog)
    total_time = sum(r.total_time for r in records)

    read = [r for r in records if r.last_read is not None]
    last = max(read, key=lambda r: r.last_read, default=None)

    return BooksProgress(
        total_books=len(catalog),
        completed_books=sum(
            1 for book in catalog if per_book[book.id] >= book.total_chapters
        ),
        current_book_id=last.book_id if last is not None else None,
        chapters_completed=len(completed_chapters),
        total_chapters=total_chapters,
        total_reading_time=total_time,
        average_reading_time=round_half_up(average(r.total_time for r in records)),
        last_read_date=last.last_read if last is not None else None,
        books_in_progress=len(
            {r.book_id for r in records if not r.completed and r.total_time > 0}
        ),
        completion_percentage=percent(len(completed_chapters), total_chapters),
    )


def calculate_tasks_progress(
    tasks: Sequence[SALTask], total_tasks: int = DEFAULT_TASK_TOTAL
) -> TasksProgress:
    """Reduce SAL challenge tasks to TasksProgress."""
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    return TasksProgress(
        completed_tasks=completed,
        total_tasks=total_tasks,
        in_progress_tasks=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
        total_time_spent=sum(t.time_spent for t in tasks),
        tasks_by_category=dict(Counter(t.category for t in tasks)),
        tasks_by_status=dict(Counter(t.status.value for t in tasks)),
        average_time_per_task=round_half_up(average(t.time_spent for t in tasks)),
        last_task_update=latest(t.completed_date or t.started_date for t in tasks),
        completion_percentage=percent(completed, total_tasks),
    )


def calculate_vocabulary_progress(
    tasks_words: Sequence[TasksVocabularyWord],
    library_words: Sequence[VocabularyWord],
) -> VocabularyProgress:
    """Reduce both vocabulary lists to VocabularyProgress.

    Mastery breakdown and review counts come from the library list only;
    task words carry no review tracking.
    """
    levels = Counter(w.mastery_level for w in library_words)
    total = len(tasks_words) + len(library_words)
    return VocabularyProgress(
        tasks_vocabulary=len(tasks_words),
        library_vocabulary=len(library_words),
        total_words=total,
        words_mastered=levels[MasteryLevel.MASTERED],
        words_learning=levels[MasteryLevel.LEARNING],
        words_familiar=levels[MasteryLevel.FAMILIAR],
        words_new=levels[MasteryLevel.NEW],
        average_review_count=round_half_up(
            average(w.review_count for w in library_words)
        ),
        last_word_added=latest(
            [w.date_added for w in tasks_words] + [w.date_added for w in library_words]
        ),
        completion_percentage=percent(total, VOCABULARY_TARGET_WORDS),
    )


def calculate_life_arenas_progress(arenas: Sequence[LifeArena]) -> LifeArenasProgress:
    """Reduce life arenas to LifeArenasProgress."""
    overall = round_half_up(average(a.current_score for a in arenas) * 10) / 10
    ranked = sorted(arenas, key=lambda a: a.current_score, reverse=True)
    milestones = [m for a in arenas for m in a.milestones]
    return LifeArenasProgress(
        overall_score=overall,
        average_arena_score=overall,
        highest_arena=ranked[0].name if ranked else "None",
        lowest_arena=ranked[-1].name if ranked else "None",
        total_milestones=len(milestones),
        completed_milestones=sum(1 for m in milestones if m.completed),
        arena_scores={a.name: a.current_score for a in arenas},
        last_arena_update=latest(a.last_updated for a in arenas),
        completion_percentage=percent(overall, ARENA_SCORE_MAX),
    )


def calculate_overall_completion(
    domain_percentages: Mapping[str, float],
    weights: Mapping[str, float] = COMPLETION_WEIGHTS,
) -> float:
    """Weighted blend of per-domain completion.

    Args:
        domain_percentages: Completion percentage (0-100) per weighted domain;
            a domain missing from the mapping counts as 0
        weights: Weight per domain

    Returns:
        Overall completion as a fraction in [0, 1]
    """
    blended = sum(
        weight * clamp(domain_percentages.get(domain, 0.0)) / 100
        for domain, weight in weights.items()
    )
    return round(clamp(safe_ratio(blended, sum(weights.values())), 0.0, 1.0), 4)
