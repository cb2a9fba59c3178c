"""
Study Module for capsule scheduling.

Provides the scheduling operations built on recall.core:
- Due-date oracle and review schedule projection
- Global performance and progress statistics
- Study-time estimation
- Study-plan packing and immutable plan updates
- Review recording
- Regeneration guard (idempotent automatic refresh)
"""

from recall.study.due import (
    days_overdue,
    get_review_schedule,
    is_capsule_due,
    is_capsule_overdue,
    next_due_at,
)
from recall.study.performance import analyze_global_performance, summarize_progress
from recall.study.plan_updates import PlanProgress, plan_progress, session_for, update_task_status
from recall.study.planner import build_study_tasks, days_until, generate_study_plan, pack_tasks
from recall.study.regeneration_guard import (
    AttemptStore,
    InMemoryAttemptStore,
    RegenerationGuard,
    attempt_key,
)
from recall.study.review import record_review
from recall.study.time_estimator import estimate_study_time

__all__ = [
    "is_capsule_due",
    "is_capsule_overdue",
    "next_due_at",
    "days_overdue",
    "get_review_schedule",
    "analyze_global_performance",
    "summarize_progress",
    "estimate_study_time",
    "generate_study_plan",
    "build_study_tasks",
    "pack_tasks",
    "days_until",
    "update_task_status",
    "plan_progress",
    "session_for",
    "PlanProgress",
    "record_review",
    "RegenerationGuard",
    "AttemptStore",
    "InMemoryAttemptStore",
    "attempt_key",
]
