"""
Plan Mutator.

Study plans are immutable; every update returns a new plan. Sessions and
tasks that are not touched are carried over as the same objects, so callers
can diff plans cheaply.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from recall.core.models import DailySession, StudyPlan, TaskStatus


def _as_date(value: dt.date | str) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(value)


def update_task_status(
    plan: StudyPlan,
    date: dt.date | str,
    capsule_id: str,
    status: TaskStatus | str,
) -> StudyPlan:
    """
    Set the status of the task for ``capsule_id`` on ``date``.

    Args:
        plan: Current plan
        date: Session date (date or ISO YYYY-MM-DD string)
        capsule_id: Capsule the task refers to
        status: New status

    Returns:
        New plan; the input plan itself when no such (date, capsule) task exists
        or the task already has that status
    """
    target = _as_date(date)
    status = TaskStatus(status)
    changed = False
    schedule: list[DailySession] = []

    for session in plan.schedule:
        if session.date != target:
            schedule.append(session)
            continue

        tasks = []
        session_changed = False
        for task in session.tasks:
            if task.capsule_id == capsule_id and task.status != status:
                tasks.append(task.model_copy(update={"status": status}))
                session_changed = True
            else:
                tasks.append(task)

        if session_changed:
            schedule.append(session.model_copy(update={"tasks": tuple(tasks)}))
            changed = True
        else:
            schedule.append(session)

    if not changed:
        return plan
    return plan.model_copy(update={"schedule": tuple(schedule)})


def session_for(plan: StudyPlan, date: dt.date | str) -> DailySession | None:
    target = _as_date(date)
    for session in plan.schedule:
        if session.date == target:
            return session
    return None


@dataclass(frozen=True)
class PlanProgress:
    """Completion summary of a study plan."""

    total_tasks: int
    completed_tasks: int
    total_minutes: int
    completed_minutes: int

    @property
    def completion_percentage(self) -> float:
        if self.total_tasks == 0:
            return 0.0
        return self.completed_tasks / self.total_tasks * 100


def plan_progress(plan: StudyPlan) -> PlanProgress:
    tasks = plan.tasks
    done = [task for task in tasks if task.is_completed]
    return PlanProgress(
        total_tasks=len(tasks),
        completed_tasks=len(done),
        total_minutes=sum(task.estimated_minutes for task in tasks),
        completed_minutes=sum(task.estimated_minutes for task in done),
    )
