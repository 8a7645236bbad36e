"""
Tests for the StreakTracker.

Covers:
- days_active counting distinct calendar dates
- current streak anchored at today or yesterday
- streak collapse after a full missed day
- timestamp vs day granularity
- empty input and future dates
- naive and aware timestamps mixed in one call
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from sal_progress.engine.streak import StreakResult, StreakTracker, as_datetime, as_day

TODAY = date(2026, 3, 15)


def d(offset: int) -> date:
    """Date `offset` days before TODAY."""
    return TODAY - timedelta(days=offset)


@pytest.fixture()
def tracker() -> StreakTracker:
    return StreakTracker()


class TestDaysActive:
    def test_empty_input(self, tracker: StreakTracker) -> None:
        result = tracker.compute_streak([], today=TODAY)
        assert result == StreakResult()
        assert result.start_date is None
        assert result.last_activity_date is None

    def test_none_values_ignored(self, tracker: StreakTracker) -> None:
        result = tracker.compute_streak([None, d(0), None], today=TODAY)
        assert result.days_active == 1

    def test_same_day_counted_once(self, tracker: StreakTracker) -> None:
        stamps = [
            datetime(2026, 3, 15, 8, 0),
            datetime(2026, 3, 15, 23, 59),
            date(2026, 3, 15),
        ]
        result = tracker.compute_streak(stamps, today=TODAY)
        assert result.days_active == 1
        assert result.current_streak == 1

    def test_span_uses_actual_timestamps(self, tracker: StreakTracker) -> None:
        first = datetime(2026, 3, 1, 7, 30)
        last = datetime(2026, 3, 15, 21, 0)
        result = tracker.compute_streak([last, first], today=TODAY)
        assert result.start_date == first
        assert result.last_activity_date == last


class TestCurrentStreak:
    def test_three_consecutive_days_ending_today(self, tracker: StreakTracker) -> None:
        result = tracker.compute_streak([d(2), d(1), d(0)], today=TODAY)
        assert result.current_streak == 3
        assert result.days_active == 3

    def test_streak_survives_quiet_today(self, tracker: StreakTracker) -> None:
        result = tracker.compute_streak([d(3), d(2), d(1)], today=TODAY)
        assert result.current_streak == 3

    def test_full_missed_day_breaks_streak(self, tracker: StreakTracker) -> None:
        result = tracker.compute_streak([d(4), d(3), d(2)], today=TODAY)
        assert result.current_streak == 0
        assert result.days_active == 3

    def test_gap_limits_streak_to_recent_run(self, tracker: StreakTracker) -> None:
        result = tracker.compute_streak([d(5), d(4), d(2), d(1), d(0)], today=TODAY)
        assert result.current_streak == 3

    def test_next_check_after_gap(self, tracker: StreakTracker) -> None:
        days = [d(2), d(1), d(0)]
        assert tracker.compute_streak(days, today=TODAY).current_streak == 3
        two_days_later = TODAY + timedelta(days=2)
        assert tracker.compute_streak(days, today=two_days_later).current_streak == 0

    def test_today_accepts_datetime(self, tracker: StreakTracker) -> None:
        now = datetime(2026, 3, 15, 0, 5)
        result = tracker.compute_streak([datetime(2026, 3, 14, 23, 55)], today=now)
        assert result.current_streak == 1

    def test_future_dates_do_not_extend_streak(self, tracker: StreakTracker) -> None:
        result = tracker.compute_streak([d(0), d(-1), d(-2)], today=TODAY)
        assert result.current_streak == 1
        assert result.days_active == 3

    def test_week_long_streak(self, tracker: StreakTracker) -> None:
        result = tracker.compute_streak([d(i) for i in range(7)], today=TODAY)
        assert result.current_streak == 7


class TestHelpers:
    def test_as_datetime_promotes_date(self) -> None:
        assert as_datetime(date(2026, 1, 2)) == datetime(2026, 1, 2, 0, 0)

    def test_as_datetime_passes_datetime(self) -> None:
        stamp = datetime(2026, 1, 2, 13, 45)
        assert as_datetime(stamp) is stamp

    def test_as_day(self) -> None:
        assert as_day(datetime(2026, 1, 2, 13, 45)) == date(2026, 1, 2)
        assert as_day(date(2026, 1, 2)) == date(2026, 1, 2)

    def test_result_to_dict(self) -> None:
        result = StreakResult(2, 1, datetime(2026, 1, 1), datetime(2026, 1, 2))
        data = result.to_dict()
        assert data["start_date"] == "2026-01-01T00:00:00"
        assert data["current_streak"] == 1


class TestMixedTimezones:
    def test_naive_and_aware_mixed(self, tracker: StreakTracker) -> None:
        naive = datetime(2026, 3, 15, 9, 0)
        aware = datetime(2026, 3, 14, 9, 0, tzinfo=UTC)
        result = tracker.compute_streak([naive, aware], today=naive)
        assert result.days_active == 2
        assert result.current_streak == 2
        assert result.start_date == datetime(2026, 3, 14, 9, 0)
        assert result.last_activity_date == naive

    def test_aware_converted_to_utc_day(self, tracker: StreakTracker) -> None:
        # 01:30 at UTC+3 is 22:30 the previous UTC day
        late = datetime(2026, 3, 15, 1, 30, tzinfo=timezone(timedelta(hours=3)))
        result = tracker.compute_streak([late, date(2026, 3, 15)], today=TODAY)
        assert result.days_active == 2
        assert result.current_streak == 2
        assert result.start_date == datetime(2026, 3, 14, 22, 30)

    def test_aware_today(self, tracker: StreakTracker) -> None:
        result = tracker.compute_streak(
            [datetime(2026, 3, 15, 9, 0)],
            today=datetime(2026, 3, 15, 12, 0, tzinfo=UTC),
        )
        assert result.current_streak == 1

    def test_as_datetime_normalises_aware(self) -> None:
        stamp = datetime(2026, 1, 2, 12, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert as_datetime(stamp) == datetime(2026, 1, 2, 17, 0)
        assert as_datetime(stamp).tzinfo is None
