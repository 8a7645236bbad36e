"""
Activity streak tracking.

Derives "days active" and "current streak" from activity timestamps across
all tracked domains. Comparison happens at calendar-day granularity:

- days_active: number of distinct dates with at least one activity
- current_streak: consecutive active dates ending today, or ending
  yesterday when today has no activity yet. A streak survives one quiet
  day in progress and collapses to 0 once a full day has been missed.

Dates after "today" count as active days but never extend the streak.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any

from sal_progress.lib.timeutil import naive_utc


def as_datetime(value: date | datetime) -> datetime:
    """Promote a date to midnight; aware datetimes become naive UTC."""
    if isinstance(value, datetime):
        return naive_utc(value)
    return datetime.combine(value, time.min)


def as_day(value: date | datetime) -> date:
    """Reduce a timestamp to its UTC calendar date."""
    if isinstance(value, datetime):
        return naive_utc(value).date()
    return value


@dataclass(frozen=True)
class StreakResult:
    """Streak and activity span derived from a set of timestamps."""

    days_active: int = 0
    current_streak: int = 0
    start_date: datetime | None = None
    last_activity_date: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "days_active": self.days_active,
            "current_streak": self.current_streak,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "last_activity_date": (
                self.last_activity_date.isoformat() if self.last_activity_date else None
            ),
        }


class StreakTracker:
    """Computes activity streaks over calendar days.

    Usage:
        tracker = StreakTracker()
        result = tracker.compute_streak(timestamps, today=now)
    """

    def compute_streak(
        self,
        activity_dates: Iterable[date | datetime | None],
        today: date | datetime,
    ) -> StreakResult:
        """Compute days active and the current streak.

        Args:
            activity_dates: Activity timestamps from any domain; None is ignored
            today: The reference day (injected for testability)

        Returns:
            StreakResult with counts and the first/last activity timestamps
        """
        stamps = [as_datetime(d) for d in activity_dates if d is not None]
        if not stamps:
            return StreakResult()

        days = {as_day(s) for s in stamps}
        return StreakResult(
            days_active=len(days),
            current_streak=self.current_streak(days, as_day(today)),
            start_date=min(stamps),
            last_activity_date=max(stamps),
        )

    @staticmethod
    def current_streak(days: set[date], today: date) -> int:
        """Length of the consecutive run ending today or yesterday.

        Args:
            days: Distinct active calendar dates
            today: The reference day

        Returns:
            Streak length in days, 0 if neither today nor yesterday is active
        """
        yesterday = today - timedelta(days=1)
        if today in days:
            cursor = today
        elif yesterday in days:
            cursor = yesterday
        else:
            return 0

        streak = 0
        while cursor in days:
            streak += 1
            cursor -= timedelta(days=1)
        return streak
