"""
Engine package: the progress & growth aggregation layer.

- StreakTracker: Days active and current streak over calendar days
- Calculators: Per-domain sub-progress reductions
- GravityScorer: 0-100 liability index over active gravity items
- GrowthTrajectoryCalculator: Goals, arenas and inverted gravity blend
- LevelRecommender: Declarative 9-rung existential ladder
- AchievementEvaluator: Declarative achievement registry
- SpacedRepetitionScheduler: Vocabulary review due dates and mastery
- ProgressAggregator: Folds every domain into JourneyProgress
- GrowthEngine: Facade over all of the above plus snapshot collection
"""

from __future__ import annotations

from .achievements import (
    ACHIEVEMENT_RULES,
    ACHIEVEMENT_THRESHOLDS,
    AchievementEvaluator,
    AchievementRule,
)
from .aggregator import DomainSnapshots, ProgressAggregator, activity_timestamps
from .gravity import GravityScorer
from .levels import (
    EXISTENTIAL_LEVELS,
    ExistentialLevel,
    LevelMetric,
    LevelMetrics,
    LevelRecommender,
    LevelRequirement,
    validate_ladder,
)
from .repetition import (
    FixedIntervalPolicy,
    MasteryIntervalPolicy,
    ReviewIntervalPolicy,
    SpacedRepetitionScheduler,
)
from .service import (
    GrowthEngine,
    GrowthReport,
    aggregate,
    due_words,
    evaluate_achievements,
    recommend_level,
)
from .streak import StreakResult, StreakTracker
from .trajectory import GrowthTrajectoryCalculator

__all__ = [
    # Facade
    "GrowthEngine",
    "GrowthReport",
    "aggregate",
    "evaluate_achievements",
    "recommend_level",
    "due_words",
    # Aggregation
    "ProgressAggregator",
    "DomainSnapshots",
    "activity_timestamps",
    # Streaks
    "StreakTracker",
    "StreakResult",
    # Growth
    "GravityScorer",
    "GrowthTrajectoryCalculator",
    # Levels
    "LevelRecommender",
    "ExistentialLevel",
    "LevelMetric",
    "LevelMetrics",
    "LevelRequirement",
    "EXISTENTIAL_LEVELS",
    "validate_ladder",
    # Achievements
    "AchievementEvaluator",
    "AchievementRule",
    "ACHIEVEMENT_RULES",
    "ACHIEVEMENT_THRESHOLDS",
    # Vocabulary
    "SpacedRepetitionScheduler",
    "ReviewIntervalPolicy",
    "FixedIntervalPolicy",
    "MasteryIntervalPolicy",
]
