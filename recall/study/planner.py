"""
Study-Plan Packer.

Builds a day-by-day study plan ending at an exam deadline:

1. One review task per capsule, costed by the study-time estimator
2. Weakest mastery first (stable: ties keep the caller's order)
3. Greedy daily packing within the minutes budget; an empty day always
   takes the next task, even an oversized one, so every day with remaining
   work makes progress
4. Cramming fallback: tasks left after the last day are dealt round-robin
   over the existing days, so no task is ever dropped
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import datetime

from loguru import logger

from recall.core.clock import ONE_DAY, ensure_utc, resolve_now, to_epoch_ms
from recall.core.exceptions import ValidationError
from recall.core.mastery import calculate_mastery_score
from recall.core.models import Capsule, DailySession, StudyPlan, StudyTask, TaskKind
from recall.core.policy import SchedulingPolicy, resolve_policy
from recall.study.time_estimator import estimate_study_time


def days_until(exam_date: datetime, now: datetime | None = None) -> int:
    """Whole days left before the deadline, counting a partial day as one."""
    return math.ceil((ensure_utc(exam_date) - resolve_now(now)) / ONE_DAY)


def build_study_tasks(
    capsules: Sequence[Capsule],
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> list[StudyTask]:
    """
    One review task per capsule, ordered weakest mastery first.

    Mastery is computed once per capsule and reused for the time estimate.
    """
    now = resolve_now(now)
    policy = resolve_policy(policy)

    ranked: list[tuple[int, StudyTask]] = []
    for capsule in capsules:
        mastery = calculate_mastery_score(capsule, now, policy)
        task = StudyTask(
            capsule_id=capsule.id,
            title=capsule.title,
            estimated_minutes=estimate_study_time(capsule, now, policy, mastery=mastery),
            kind=TaskKind.REVIEW,
        )
        ranked.append((mastery, task))

    ranked.sort(key=lambda pair: pair[0])
    return [task for _, task in ranked]


def pack_tasks(
    tasks: Sequence[StudyTask],
    start: datetime,
    days: int,
    daily_minutes: int,
) -> list[DailySession]:
    """
    Distribute prioritized tasks over ``days`` consecutive days.

    Args:
        tasks: Tasks in priority order
        start: First day (its UTC calendar date is day 0)
        days: Number of sessions to produce (at least 1)
        daily_minutes: Minutes budget per day

    Returns:
        Exactly ``days`` DailySessions
    """
    start = ensure_utc(start)
    buckets: list[list[StudyTask]] = []
    rest_days: list[bool] = []
    cursor = 0

    for _ in range(days):
        today: list[StudyTask] = []
        used = 0

        while cursor < len(tasks):
            task = tasks[cursor]
            if used + task.estimated_minutes <= daily_minutes:
                today.append(task)
                used += task.estimated_minutes
                cursor += 1
            else:
                # Too big for what's left; an empty day takes it anyway
                if not today:
                    today.append(task)
                    cursor += 1
                break

        buckets.append(today)
        rest_days.append(not today and cursor >= len(tasks))

    leftover = tasks[cursor:]
    if leftover:
        logger.warning(
            f"{len(leftover)} tasks did not fit in {days} days of {daily_minutes} min; "
            f"cramming them into existing days"
        )
        for index, task in enumerate(leftover):
            buckets[index % days].append(task)

    return [
        DailySession(
            date=(start + offset * ONE_DAY).date(),
            tasks=tuple(bucket),
            is_rest_day=rest,
        )
        for offset, (bucket, rest) in enumerate(zip(buckets, rest_days))
    ]


def generate_study_plan(
    name: str,
    capsules: Iterable[Capsule],
    exam_date: datetime,
    daily_minutes: int,
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> StudyPlan:
    """
    Generate a study plan distributed up to the exam date.

    Args:
        name: Plan name
        capsules: Capsules to cover (a frozen snapshot)
        exam_date: Deadline; must be strictly in the future
        daily_minutes: Minutes available per day
        now: Plan creation time (defaults to UTC now)
        policy: Policy table override

    Returns:
        StudyPlan with exactly ceil((exam_date - now) / 1 day) sessions

    Raises:
        ValidationError: If exam_date is not after now
    """
    now = resolve_now(now)
    exam_date = ensure_utc(exam_date)
    if exam_date <= now:
        raise ValidationError("deadline must be in the future", field="exam_date", value=exam_date)

    policy = resolve_policy(policy)
    capsules = list(capsules)
    days = days_until(exam_date, now)

    if daily_minutes <= 0:
        logger.debug(f"Daily budget is {daily_minutes} min; every day will take one forced task")

    tasks = build_study_tasks(capsules, now, policy)
    schedule = pack_tasks(tasks, now, days, daily_minutes)

    plan = StudyPlan(
        id=f"plan_{to_epoch_ms(now)}",
        name=name,
        exam_date=exam_date,
        daily_minutes_available=daily_minutes,
        schedule=tuple(schedule),
        created_at=now,
        capsule_ids=tuple(capsule.id for capsule in capsules),
    )

    rest_count = sum(1 for session in schedule if session.is_rest_day)
    logger.info(
        f"Study plan '{name}' built: {len(tasks)} tasks over {days} days "
        f"({rest_count} rest days, {daily_minutes} min/day)"
    )

    return plan
