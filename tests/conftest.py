"""
Shared test fixtures for the SAL progress engine.

This module provides common fixtures used across all test modules:
- Environment setup (dev-mode logging, no env overrides leaking in)
- A fixed reference time
- Raw domain snapshots shaped like the collaborators' payloads

Usage:
    All fixtures are automatically available to any test in the tests/ directory.
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# 1. Environment setup -- before application imports
# ---------------------------------------------------------------------------

os.environ.setdefault("SAL_PROGRESS_DEV_MODE", "1")
for _name in (
    "SAL_PROGRESS_SNAPSHOT_TIMEOUT",
    "SAL_PROGRESS_REVIEW_INTERVAL_DAYS",
    "SAL_PROGRESS_STUDY_BATCH",
):
    os.environ.pop(_name, None)


# ---------------------------------------------------------------------------
# 2. now -- fixed reference time (naive UTC)
# ---------------------------------------------------------------------------

NOW = datetime(2026, 3, 15, 12, 0, 0)


@pytest.fixture()
def now() -> datetime:
    """Fixed "now" shared by streak, review and aggregation tests."""
    return NOW


def days_ago(days: int, hour: int = 9) -> str:
    """ISO timestamp `days` before NOW, at the given hour."""
    stamp = (NOW - timedelta(days=days)).replace(hour=hour, minute=0)
    return stamp.isoformat()


# ---------------------------------------------------------------------------
# 3. raw_snapshots -- one realistic payload per domain (camelCase keys)
# ---------------------------------------------------------------------------

@pytest.fixture()
def raw_snapshots() -> dict[str, Any]:
    """
    Provide collaborator-shaped payloads for every domain.

    Activity falls on NOW, NOW-1 and NOW-2 days, so the streak is 3.
    book-1 (5 chapters) is fully read; book-2 has one chapter in progress.
    """
    return {
        "journal": [
            {"id": "j1", "type": "reflection", "date": days_ago(2), "wordCount": 300},
            {"id": "j2", "type": "gratitude", "date": days_ago(1), "wordCount": 200},
            {"id": "j3", "type": "reflection", "date": days_ago(0), "wordCount": 250},
        ],
        "reading": {
            **{
                f"book-1-ch{i}": {
                    "bookId": "book-1",
                    "chapterId": f"ch{i}",
                    "totalTime": 600,
                    "lastRead": days_ago(2, hour=8),
                    "completed": True,
                }
                for i in range(1, 6)
            },
            "book-2-ch1": {
                "bookId": "book-2",
                "chapterId": "ch1",
                "totalTime": 300,
                "lastRead": days_ago(1, hour=20),
                "completed": False,
            },
        },
        "tasks": [
            {
                "id": 1, "category": "foundation", "status": "completed",
                "startedDate": days_ago(2), "completedDate": days_ago(1),
                "timeSpent": 40,
            },
            {
                "id": 2, "category": "action", "status": "in-progress",
                "startedDate": days_ago(0), "timeSpent": 20,
            },
            {"id": 3, "category": "action", "status": "not-started", "timeSpent": 0},
        ],
        "tasks_vocabulary": [
            {"id": "tv1", "word": "agency", "dateAdded": days_ago(1)},
        ],
        "vocabulary": [
            {
                "id": "v1", "word": "sovereign", "dateAdded": days_ago(30),
                "lastReviewed": days_ago(10), "reviewCount": 4,
                "masteryLevel": "familiar",
            },
            {
                "id": "v2", "word": "praxis", "dateAdded": days_ago(2),
                "lastReviewed": days_ago(2), "reviewCount": 1,
                "masteryLevel": "learning",
            },
        ],
        "arenas": [
            {"id": "a1", "name": "Health", "currentScore": 7,
             "milestones": [{"id": "m1", "completed": True}, {"id": "m2"}],
             "lastUpdated": days_ago(1)},
            {"id": "a2", "name": "Finance", "currentScore": 5,
             "milestones": [], "lastUpdated": days_ago(2)},
        ],
        "gravity": [
            {"id": "g1", "categoryId": "habits", "severity": 3, "status": "active"},
            {"id": "g2", "categoryId": "beliefs", "severity": 5, "status": "active"},
            {"id": "g3", "categoryId": "habits", "severity": 4, "status": "resolved"},
        ],
        "goals": [
            {"id": "goal1", "progress": 100, "status": "completed"},
            {"id": "goal2", "progress": 40, "status": "active"},
        ],
        "reviews": [{"id": "r1", "overallRating": 7}],
    }
