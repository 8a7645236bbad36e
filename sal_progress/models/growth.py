"""
Growth view models: trajectory and goal/gravity statistics.

A GrowthTrajectory blends goal completion, arena ratings and the inverted
gravity score into one 0-100 figure. All four fields are percentages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class GrowthTrajectory:
    """Composite growth score and its inputs (all 0-100)."""

    trajectory: int = 0
    gravity_score: int = 0
    goal_completion: float = 0.0
    arena_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "trajectory": self.trajectory,
            "gravity_score": self.gravity_score,
            "goal_completion": self.goal_completion,
            "arena_score": self.arena_score,
        }


@dataclass
class GrowthStats:
    """Counts over goals, gravity items and weekly reviews."""

    total_goals: int = 0
    active_goals: int = 0
    completed_goals: int = 0
    average_progress: int = 0
    active_gravity_items: int = 0
    resolved_issues: int = 0
    weekly_reviews: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "total_goals": self.total_goals,
            "active_goals": self.active_goals,
            "completed_goals": self.completed_goals,
            "average_progress": self.average_progress,
            "active_gravity_items": self.active_gravity_items,
            "resolved_issues": self.resolved_issues,
            "weekly_reviews": self.weekly_reviews,
        }
