"""
SAL Progress -- progress & growth aggregation engine.

Reads snapshots from the journal, reading, task, vocabulary, life arena,
gravity and goal domains and derives cross-domain views from them:
journey progress, streaks, achievements, growth trajectory, existential
level recommendation and vocabulary review schedules.

The engine is a read/derive library. It owns no data, mutates nothing and
exposes no network, file or CLI surface.
"""

from __future__ import annotations

from sal_progress.engine import (
    DomainSnapshots,
    GrowthEngine,
    GrowthReport,
    aggregate,
    due_words,
    evaluate_achievements,
    recommend_level,
)
from sal_progress.models import Achievement, JourneyProgress, VocabularyWord

__version__ = "1.0.0"

__all__ = [
    "GrowthEngine",
    "GrowthReport",
    "DomainSnapshots",
    "JourneyProgress",
    "Achievement",
    "VocabularyWord",
    "aggregate",
    "evaluate_achievements",
    "recommend_level",
    "due_words",
]
