"""
Growth trajectory calculation.

Combines goal completion, life arena ratings and the gravity score into a
single 0-100 trajectory:

    trajectory = arena_score * 0.4 + goal_completion * 0.3 + (100 - gravity) * 0.3

Gravity is inverted because a lower liability means better growth. The
weights come from TRAJECTORY_WEIGHTS. Every output is clamped to [0, 100]
so that partial inputs never leak out-of-range values downstream.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from sal_progress.config.constants import ARENA_SCORE_MAX, TRAJECTORY_WEIGHTS
from sal_progress.lib.numeric import average, clamp, round_half_up, safe_ratio
from sal_progress.models.growth import GrowthStats, GrowthTrajectory
from sal_progress.models.records import (
    GoalStatus,
    GravityItem,
    GravityStatus,
    GrowthGoal,
    WeeklyReview,
)


class GrowthTrajectoryCalculator:
    """Blends goals, arenas and gravity into a trajectory score."""

    def __init__(self, weights: Mapping[str, float] = TRAJECTORY_WEIGHTS) -> None:
        self._weights = weights

    def trajectory(
        self,
        goals: Iterable[GrowthGoal],
        arena_scores: Iterable[float],
        gravity_score: int,
    ) -> GrowthTrajectory:
        """Calculate the growth trajectory.

        Args:
            goals: Growth goals in any status
            arena_scores: Life arena ratings on the 1-10 scale
            gravity_score: Liability index from GravityScorer (0-100)

        Returns:
            GrowthTrajectory with all fields in [0, 100]
        """
        goal_list = list(goals)
        completed = sum(1 for g in goal_list if g.status == GoalStatus.COMPLETED)
        goal_completion = clamp(safe_ratio(completed, len(goal_list)) * 100)
        arena_score = clamp(average(arena_scores) / ARENA_SCORE_MAX * 100)
        gravity = int(clamp(gravity_score))

        raw = (
            arena_score * self._weights["arenas"]
            + goal_completion * self._weights["goals"]
            + (100 - gravity) * self._weights["gravity"]
        )
        return GrowthTrajectory(
            trajectory=int(clamp(round_half_up(raw))),
            gravity_score=gravity,
            goal_completion=goal_completion,
            arena_score=arena_score,
        )

    @staticmethod
    def growth_stats(
        goals: Iterable[GrowthGoal],
        gravity_items: Iterable[GravityItem],
        reviews: Iterable[WeeklyReview] = (),
    ) -> GrowthStats:
        """Count goals, gravity items and weekly reviews by status."""
        goal_list = list(goals)
        item_list = list(gravity_items)
        return GrowthStats(
            total_goals=len(goal_list),
            active_goals=sum(1 for g in goal_list if g.status == GoalStatus.ACTIVE),
            completed_goals=sum(
                1 for g in goal_list if g.status == GoalStatus.COMPLETED
            ),
            average_progress=round_half_up(average(g.progress for g in goal_list)),
            active_gravity_items=sum(
                1 for i in item_list if i.status == GravityStatus.ACTIVE
            ),
            resolved_issues=sum(
                1 for i in item_list if i.status == GravityStatus.RESOLVED
            ),
            weekly_reviews=len(list(reviews)),
        )
