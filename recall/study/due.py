"""
Due-Date Oracle.

Answers whether a capsule needs review now, how far past due it is, and what
its upcoming review stages look like. Unseen capsules are always due.
"""

from __future__ import annotations

from datetime import datetime

from recall.core.clock import days_between, resolve_now
from recall.core.intervals import review_interval, review_interval_days
from recall.core.models import Capsule, ReviewStageInfo, ReviewStatus
from recall.core.policy import SchedulingPolicy, resolve_policy


def next_due_at(capsule: Capsule, policy: SchedulingPolicy | None = None) -> datetime | None:
    """
    When the capsule's next review falls due.

    Reviewed capsules: ``last_reviewed + interval(review_stage)``.
    Unseen capsules are due from creation, so this is ``created_at``
    (None when the record carries no creation time).
    """
    if capsule.last_reviewed is None:
        return capsule.created_at
    return capsule.last_reviewed + review_interval(capsule.review_stage, policy)


def is_capsule_due(
    capsule: Capsule,
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> bool:
    """Check if a capsule is due for review."""
    if capsule.last_reviewed is None:
        return True
    return resolve_now(now) >= next_due_at(capsule, policy)


def days_overdue(
    capsule: Capsule,
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> float | None:
    """
    Days past the scheduled review date.

    Negative if not yet due; None if there is no reference date.
    """
    due_at = next_due_at(capsule, policy)
    if due_at is None:
        return None
    return days_between(due_at, resolve_now(now))


def is_capsule_overdue(
    capsule: Capsule,
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> bool:
    """Due by more than the policy's grace window."""
    policy = resolve_policy(policy)
    if not is_capsule_due(capsule, now, policy):
        return False
    overdue_days = days_overdue(capsule, now, policy)
    return overdue_days is not None and overdue_days > policy.overdue_grace_days


def get_review_schedule(
    capsule: Capsule,
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> list[ReviewStageInfo]:
    """
    Completed stages, the next review and one projected stage after it.

    Stage n is the n-th review of the capsule; its ``interval_days`` is the
    wait that precedes it. Completed stages are dated from history when the
    matching entry exists. Only stages covered by the interval table are
    listed, so a capsule past the last step has no next or projected entry.
    """
    policy = resolve_policy(policy)
    now = resolve_now(now)
    schedule: list[ReviewStageInfo] = []

    for index in range(min(capsule.review_stage, policy.max_stage)):
        review_date = capsule.history[index].date if index < len(capsule.history) else None
        schedule.append(
            ReviewStageInfo(
                stage=index + 1,
                interval_days=review_interval_days(index, policy),
                review_date=review_date,
                status=ReviewStatus.COMPLETED,
            )
        )

    next_stage = capsule.review_stage
    next_date = next_due_at(capsule, policy)
    if next_stage < policy.max_stage:
        schedule.append(
            ReviewStageInfo(
                stage=next_stage + 1,
                interval_days=review_interval_days(next_stage, policy),
                review_date=next_date,
                status=ReviewStatus.DUE if is_capsule_due(capsule, now, policy) else ReviewStatus.UPCOMING,
            )
        )

    if next_stage + 1 < policy.max_stage:
        future_date = next_date + review_interval(next_stage + 1, policy) if next_date else None
        schedule.append(
            ReviewStageInfo(
                stage=next_stage + 2,
                interval_days=review_interval_days(next_stage + 1, policy),
                review_date=future_date,
                status=ReviewStatus.UPCOMING,
            )
        )

    return schedule
