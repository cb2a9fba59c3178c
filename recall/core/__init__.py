"""
Core Module - Shared domain models, policy and scoring.

Components:
- models: Capsule, StudyTask, DailySession, StudyPlan and analytics projections
- policy: SchedulingPolicy table (interval steps, decay, weights)
- intervals: Review stage -> interval mapping
- mastery: Forgetting curve, retention probability and mastery score
- exceptions: RecallError, ValidationError

Design Principle:
Everything in recall/core/ is pure computation over immutable values.
recall/study/ builds the scheduling operations on top of it.
"""

from recall.core.exceptions import RecallError, ValidationError
from recall.core.intervals import review_interval, review_interval_days
from recall.core.mastery import (
    MasteryLevel,
    calculate_mastery_score,
    calculate_retention_probability,
    get_mastery_level,
)
from recall.core.models import (
    Capsule,
    DailySession,
    PerformanceStats,
    ProgressBreakdown,
    ReviewLog,
    ReviewStageInfo,
    ReviewStatus,
    ReviewType,
    StudyPlan,
    StudyTask,
    TaskKind,
    TaskStatus,
)
from recall.core.policy import SchedulingPolicy, get_policy

__all__ = [
    # Models
    "Capsule",
    "ReviewLog",
    "ReviewType",
    "StudyTask",
    "TaskKind",
    "TaskStatus",
    "DailySession",
    "StudyPlan",
    "PerformanceStats",
    "ProgressBreakdown",
    "ReviewStageInfo",
    "ReviewStatus",
    # Policy
    "SchedulingPolicy",
    "get_policy",
    # Intervals
    "review_interval",
    "review_interval_days",
    # Mastery
    "MasteryLevel",
    "calculate_mastery_score",
    "calculate_retention_probability",
    "get_mastery_level",
    # Errors
    "RecallError",
    "ValidationError",
]
