"""
Performance Aggregator.

Folds per-capsule mastery, retention and due state over a whole collection.
A single ``now`` is resolved per call so every capsule is judged against the
same instant.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from loguru import logger

from recall.core.clock import resolve_now
from recall.core.mastery import calculate_mastery_score, calculate_retention_probability
from recall.core.models import Capsule, PerformanceStats, ProgressBreakdown
from recall.core.policy import SchedulingPolicy, resolve_policy
from recall.study.due import is_capsule_due, is_capsule_overdue


def analyze_global_performance(
    capsules: Iterable[Capsule],
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> PerformanceStats:
    """
    Analyse global learner performance.

    Args:
        capsules: The learner's collection
        now: Evaluation time (defaults to UTC now)
        policy: Policy table override

    Returns:
        PerformanceStats; all zeros for an empty collection
    """
    capsules = list(capsules)
    if not capsules:
        return PerformanceStats()

    now = resolve_now(now)
    policy = resolve_policy(policy)

    total_mastery = 0
    total_retention = 0
    due_count = 0
    overdue_count = 0

    for capsule in capsules:
        total_mastery += calculate_mastery_score(capsule, now, policy)
        total_retention += calculate_retention_probability(capsule, now, policy)
        if is_capsule_due(capsule, now, policy):
            due_count += 1
            if is_capsule_overdue(capsule, now, policy):
                overdue_count += 1

    total = len(capsules)
    stats = PerformanceStats(
        global_mastery=round(total_mastery / total),
        retention_average=round(total_retention / total),
        due_count=due_count,
        overdue_count=overdue_count,
        upcoming_count=total - due_count,
    )

    logger.debug(
        f"Analysed {total} capsules: mastery={stats.global_mastery}, "
        f"retention={stats.retention_average}, due={due_count}, overdue={overdue_count}"
    )

    return stats


def summarize_progress(
    capsules: Iterable[Capsule],
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> ProgressBreakdown:
    """Partition a collection into new, due and in-progress capsules."""
    now = resolve_now(now)
    new_count = due_count = in_progress_count = 0

    for capsule in capsules:
        if capsule.is_new:
            new_count += 1
        elif is_capsule_due(capsule, now, policy):
            due_count += 1
        else:
            in_progress_count += 1

    return ProgressBreakdown(
        total=new_count + due_count + in_progress_count,
        new_count=new_count,
        due_count=due_count,
        in_progress_count=in_progress_count,
    )
