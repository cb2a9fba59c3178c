"""
Scheduling policy table.

Every tunable number the engine uses (interval steps, forgetting-curve rate,
mastery weights, overdue grace window, study-time weights) is collected in one
frozen dataclass. Engine functions accept an optional ``policy`` argument and
fall back to the policy built from the cached settings.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchedulingPolicy:
    """Configuration for interval, mastery and study-time calculations."""

    review_intervals_days: tuple[int, ...] = (1, 3, 7, 14, 30, 60, 90, 120)
    retention_decay_rate: float = 0.15
    mastery_recent_window: int = 3
    mastery_recency_decay: float = 0.5
    mastery_consistency_weight: float = 60.0
    mastery_performance_weight: float = 40.0
    overdue_grace_days: float = 3.0
    study_base_minutes: int = 15
    study_minutes_per_concept: float = 3.0
    study_minutes_per_flashcard: float = 1.0
    study_minutes_per_quiz_question: float = 2.0

    @property
    def max_stage(self) -> int:
        """Stage at which the interval stops growing."""
        return len(self.review_intervals_days)


def get_policy() -> SchedulingPolicy:
    """Policy built from the cached application settings."""
    from config import get_settings

    return get_settings().get_scheduling_policy()


def resolve_policy(policy: SchedulingPolicy | None) -> SchedulingPolicy:
    return policy if policy is not None else get_policy()
