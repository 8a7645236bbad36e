"""
Tests for the ProgressAggregator.

Covers:
- Full aggregation of the shared raw snapshots
- Missing and empty snapshots yield zero values
- Degraded domains are reported, not raised
- DomainSnapshots.from_raw parsing
- Activity timestamps across domains
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from sal_progress.engine.aggregator import (
    DomainSnapshots,
    ProgressAggregator,
    activity_timestamps,
)
from sal_progress.models.progress import JourneyProgress


@pytest.fixture()
def aggregator() -> ProgressAggregator:
    return ProgressAggregator()


@pytest.fixture()
def progress(
    aggregator: ProgressAggregator, raw_snapshots: dict[str, Any], now: datetime
) -> JourneyProgress:
    return aggregator.aggregate(raw_snapshots, now)


class TestAggregateFixture:
    def test_journal(self, progress: JourneyProgress) -> None:
        journal = progress.journal_progress
        assert journal.pages_written == 3
        assert journal.entries_count == 3
        assert journal.average_words_per_entry == 250
        assert journal.last_entry_date == datetime(2026, 3, 15, 9, 0)
        assert journal.entries_by_type == {"reflection": 2, "gratitude": 1}
        assert journal.completion_percentage == 1.5

    def test_books(self, progress: JourneyProgress) -> None:
        books = progress.books_progress
        assert books.completed_books == 1
        assert books.chapters_completed == 5
        assert books.total_chapters == 81
        assert books.total_reading_time == 3300
        assert books.average_reading_time == 550
        assert books.current_book_id == "book-2"
        assert books.last_read_date == datetime(2026, 3, 14, 20, 0)
        assert books.books_in_progress == 1

    def test_tasks(self, progress: JourneyProgress) -> None:
        tasks = progress.tasks_progress
        assert tasks.completed_tasks == 1
        assert tasks.in_progress_tasks == 1
        assert tasks.total_time_spent == 60
        assert tasks.average_time_per_task == 20
        assert tasks.last_task_update == datetime(2026, 3, 15, 9, 0)
        assert tasks.tasks_by_category == {"foundation": 1, "action": 2}
        assert tasks.completion_percentage == 4.0

    def test_vocabulary(self, progress: JourneyProgress) -> None:
        vocab = progress.vocabulary_progress
        assert vocab.total_words == 3
        assert vocab.tasks_vocabulary == 1
        assert vocab.library_vocabulary == 2
        assert vocab.words_familiar == 1
        assert vocab.words_learning == 1
        assert vocab.average_review_count == 3
        assert vocab.last_word_added == datetime(2026, 3, 14, 9, 0)

    def test_arenas(self, progress: JourneyProgress) -> None:
        arenas = progress.life_arenas_progress
        assert arenas.overall_score == 6.0
        assert arenas.highest_arena == "Health"
        assert arenas.lowest_arena == "Finance"
        assert arenas.total_milestones == 2
        assert arenas.completed_milestones == 1
        assert arenas.completion_percentage == 60.0

    def test_overall_completion(self, progress: JourneyProgress) -> None:
        assert progress.overall_completion == pytest.approx(0.1493, abs=1e-4)

    def test_activity(self, progress: JourneyProgress) -> None:
        assert progress.days_active == 4
        assert progress.current_streak == 3
        assert progress.start_date == datetime(2026, 2, 13, 9, 0)
        assert progress.last_activity_date == datetime(2026, 3, 15, 9, 0)

    def test_growth(self, progress: JourneyProgress) -> None:
        assert progress.growth.gravity_score == 80
        assert progress.growth.goal_completion == pytest.approx(50.0)
        assert progress.growth.arena_score == pytest.approx(60.0)
        assert progress.growth.trajectory == 45

    def test_growth_stats(self, progress: JourneyProgress) -> None:
        stats = progress.growth_stats
        assert stats.total_goals == 2
        assert stats.active_goals == 1
        assert stats.completed_goals == 1
        assert stats.average_progress == 70
        assert stats.active_gravity_items == 2
        assert stats.resolved_issues == 1
        assert stats.weekly_reviews == 1

    def test_no_degraded_domains(self, progress: JourneyProgress) -> None:
        assert progress.degraded_domains == []

    def test_serializable(self, progress: JourneyProgress) -> None:
        data = progress.to_dict()
        assert data["current_streak"] == 3
        assert data["last_activity_date"] == "2026-03-15T09:00:00"
        assert data["growth"]["trajectory"] == 45


class TestAggregateEdgeCases:
    def test_none_snapshots(self, aggregator: ProgressAggregator, now: datetime) -> None:
        progress = aggregator.aggregate(None, now)
        assert progress.overall_completion == 0.0
        assert progress.days_active == 0
        assert progress.current_streak == 0
        assert progress.start_date is None
        assert progress.last_activity_date is None
        assert progress.journal_progress.pages_written == 0
        assert progress.books_progress.completed_books == 0
        assert progress.life_arenas_progress.highest_arena == "None"
        # Only the inverted gravity term remains
        assert progress.growth.trajectory == 30

    def test_missing_domains(
        self, aggregator: ProgressAggregator, raw_snapshots: dict[str, Any], now: datetime
    ) -> None:
        progress = aggregator.aggregate({"journal": raw_snapshots["journal"]}, now)
        assert progress.journal_progress.entries_count == 3
        assert progress.tasks_progress.completed_tasks == 0
        assert progress.days_active == 3
        assert progress.current_streak == 3

    def test_malformed_records_skipped(
        self, aggregator: ProgressAggregator, now: datetime
    ) -> None:
        raw = {"journal": ["oops", None, {"wordCount": "many", "date": "not a date"}]}
        progress = aggregator.aggregate(raw, now)
        assert progress.journal_progress.entries_count == 1
        assert progress.journal_progress.total_words == 0
        assert progress.days_active == 0

    def test_degraded_reported(self, aggregator: ProgressAggregator, now: datetime) -> None:
        snapshots = DomainSnapshots.from_raw({}, degraded={"tasks", "journal"})
        progress = aggregator.aggregate(snapshots, now)
        assert progress.degraded_domains == ["journal", "tasks"]

    def test_aware_now_accepted(
        self, aggregator: ProgressAggregator, raw_snapshots: dict[str, Any]
    ) -> None:
        from datetime import UTC

        progress = aggregator.aggregate(raw_snapshots, datetime(2026, 3, 15, 12, tzinfo=UTC))
        assert progress.current_streak == 3

    def test_streak_from_yesterday(
        self, aggregator: ProgressAggregator, raw_snapshots: dict[str, Any]
    ) -> None:
        progress = aggregator.aggregate(raw_snapshots, datetime(2026, 3, 16, 8, 0))
        assert progress.current_streak == 3

    def test_streak_broken(
        self, aggregator: ProgressAggregator, raw_snapshots: dict[str, Any]
    ) -> None:
        progress = aggregator.aggregate(raw_snapshots, datetime(2026, 3, 17, 8, 0))
        assert progress.current_streak == 0
        assert progress.days_active == 4


class TestDomainSnapshots:
    def test_from_raw_parses_every_domain(self, raw_snapshots: dict[str, Any]) -> None:
        snapshots = DomainSnapshots.from_raw(raw_snapshots)
        assert len(snapshots.journal) == 3
        assert len(snapshots.reading) == 6
        assert len(snapshots.tasks) == 3
        assert len(snapshots.tasks_vocabulary) == 1
        assert len(snapshots.vocabulary) == 2
        assert len(snapshots.arenas) == 2
        assert len(snapshots.gravity) == 3
        assert len(snapshots.goals) == 2
        assert len(snapshots.reviews) == 1
        assert snapshots.degraded == frozenset()

    def test_unknown_domain_ignored(self) -> None:
        snapshots = DomainSnapshots.from_raw({"horoscope": [{"sign": "leo"}]})
        assert snapshots == DomainSnapshots()

    def test_activity_timestamps(self, raw_snapshots: dict[str, Any]) -> None:
        stamps = {s for s in activity_timestamps(DomainSnapshots.from_raw(raw_snapshots)) if s}
        assert min(stamps) == datetime(2026, 2, 13, 9, 0)
        assert max(stamps) == datetime(2026, 3, 15, 9, 0)
