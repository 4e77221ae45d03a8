"""Trial plan progression.

A trial is a short run of daily tasks (day 1 to 7). The first task activates when
the trial starts; completing a day activates the next one. Every helper returns a
new list ordered by day number.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from volition_engine.schema import TrialTask, TrialTaskStatus, utc_now

logger = logging.getLogger(__name__)

_FINISHED = (TrialTaskStatus.COMPLETED, TrialTaskStatus.SKIPPED)


class TrialTaskError(ValueError):
    """Raised when a trial task cannot be found."""


def _by_day(tasks: Sequence[TrialTask]) -> list[TrialTask]:
    return sorted(tasks, key=lambda task: task.day_number)


def activate_first_task(tasks: Sequence[TrialTask]) -> list[TrialTask]:
    """Activate the day-one task when no task has been touched yet."""

    ordered = _by_day(tasks)
    if ordered and all(task.status == TrialTaskStatus.PENDING for task in ordered):
        ordered[0] = replace(ordered[0], status=TrialTaskStatus.ACTIVE)
    return ordered


def mark_trial_task_done(
    tasks: Sequence[TrialTask], task_id: str, *, now: Optional[datetime] = None
) -> list[TrialTask]:
    """Complete ``task_id`` and activate the task scheduled for the following day."""

    ordered = _by_day(tasks)
    index = next((i for i, task in enumerate(ordered) if task.id == task_id), None)
    if index is None:
        raise TrialTaskError(f"Task not found: {task_id}")

    done = replace(ordered[index], status=TrialTaskStatus.COMPLETED, completed_at=now or utc_now())
    ordered[index] = done

    next_day = done.day_number + 1
    for i, task in enumerate(ordered):
        if task.day_number == next_day:
            ordered[i] = replace(task, status=TrialTaskStatus.ACTIVE)
            break
    else:
        logger.info("Trial for goal %s reached its last task", done.goal_id)

    return activate_first_task(ordered)


def trial_finished(tasks: Sequence[TrialTask]) -> bool:
    """True when the trial has tasks and none is left pending or active."""

    return bool(tasks) and all(task.status in _FINISHED for task in tasks)
