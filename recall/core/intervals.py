"""
Interval Model.

Maps a capsule's review stage to the number of days until its next review,
using a fixed Leitner-style step table (see ``SchedulingPolicy``):

    stage:     0  1  2  3   4   5   6   7   8+
    interval:  0  1  3  7  14  30  60  90  120

Stage 0 (never reviewed) has a zero interval, so new capsules are due
immediately. Stages past the end of the table reuse the last step.
"""

from __future__ import annotations

from datetime import timedelta

from recall.core.policy import SchedulingPolicy, resolve_policy


def review_interval_days(stage: int, policy: SchedulingPolicy | None = None) -> int:
    """
    Days between a review at ``stage`` and the next one.

    Args:
        stage: Review stage counter (negative values are treated as 0)
        policy: Interval table override

    Returns:
        Interval in whole days; non-decreasing in ``stage``
    """
    if stage <= 0:
        return 0
    steps = resolve_policy(policy).review_intervals_days
    return steps[min(stage, len(steps)) - 1]


def review_interval(stage: int, policy: SchedulingPolicy | None = None) -> timedelta:
    return timedelta(days=review_interval_days(stage, policy))
