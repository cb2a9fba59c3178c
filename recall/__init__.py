"""
Recall Planner - spaced-repetition scheduling and adaptive study plans.

Pure, synchronous computation over immutable capsule records:
- When is a capsule next due?
- How well is it mastered (0-100)?
- How is the whole collection doing?
- How should the remaining work be spread over the days before an exam?
"""

from recall.core import (
    Capsule,
    DailySession,
    MasteryLevel,
    PerformanceStats,
    ProgressBreakdown,
    RecallError,
    ReviewLog,
    ReviewStageInfo,
    ReviewStatus,
    ReviewType,
    SchedulingPolicy,
    StudyPlan,
    StudyTask,
    TaskKind,
    TaskStatus,
    ValidationError,
    calculate_mastery_score,
    calculate_retention_probability,
    get_mastery_level,
    review_interval,
    review_interval_days,
)
from recall.study import (
    InMemoryAttemptStore,
    PlanProgress,
    RegenerationGuard,
    analyze_global_performance,
    estimate_study_time,
    generate_study_plan,
    get_review_schedule,
    is_capsule_due,
    is_capsule_overdue,
    plan_progress,
    record_review,
    summarize_progress,
    update_task_status,
)

__version__ = "1.0.0"

__all__ = [
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
    "SchedulingPolicy",
    "MasteryLevel",
    "RecallError",
    "ValidationError",
    "review_interval",
    "review_interval_days",
    "calculate_mastery_score",
    "calculate_retention_probability",
    "get_mastery_level",
    "is_capsule_due",
    "is_capsule_overdue",
    "get_review_schedule",
    "analyze_global_performance",
    "summarize_progress",
    "estimate_study_time",
    "generate_study_plan",
    "update_task_status",
    "plan_progress",
    "PlanProgress",
    "record_review",
    "RegenerationGuard",
    "InMemoryAttemptStore",
]
