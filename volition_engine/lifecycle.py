"""Job status transitions.

Each transition checks the current status, updates the job's work sessions and
returns a new ``Job``. Persisting the result is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from volition_engine.schema import FailureNote, Job, JobStatus, JobType, utc_now
from volition_engine.work_sessions import end_current_session, is_session_active, start_session

logger = logging.getLogger(__name__)


class JobTransitionError(ValueError):
    """Raised when a job is not in a status that allows the requested action."""


def _require_status(job: Job, expected: JobStatus, action: str) -> None:
    if job.status != expected:
        raise JobTransitionError(f"Cannot {action}: job is in {job.status.value} status")


def start_job(job: Job, *, now: Optional[datetime] = None) -> Job:
    _require_status(job, JobStatus.PENDING, "start job")
    logger.info("Starting job %s", job.id)
    return replace(
        job,
        status=JobStatus.ACTIVE,
        work_sessions=tuple(start_session(job.work_sessions, now=now)),
    )


def pause_job(job: Job, *, now: Optional[datetime] = None) -> Job:
    """Close the open work session; the job stays ACTIVE."""

    _require_status(job, JobStatus.ACTIVE, "pause job")
    return replace(job, work_sessions=tuple(end_current_session(job.work_sessions, now=now)))


def resume_job(job: Job, *, now: Optional[datetime] = None) -> Job:
    _require_status(job, JobStatus.ACTIVE, "resume job")
    if is_session_active(job.work_sessions):
        raise JobTransitionError("Cannot resume job: a work session is already running")
    return replace(job, work_sessions=tuple(start_session(job.work_sessions, now=now)))


def mark_job_done(job: Job, *, now: Optional[datetime] = None) -> Job:
    _require_status(job, JobStatus.ACTIVE, "mark job as done")
    logger.info("Job %s completed", job.id)
    return replace(
        job,
        status=JobStatus.COMPLETED,
        work_sessions=tuple(end_current_session(job.work_sessions, now=now)),
    )


def mark_job_failed(job: Job, *, now: Optional[datetime] = None) -> Job:
    _require_status(job, JobStatus.ACTIVE, "mark job as failed")
    logger.info("Job %s failed (failure %d)", job.id, job.failure_count + 1)
    return replace(
        job,
        status=JobStatus.FAILED,
        failure_count=job.failure_count + 1,
        work_sessions=tuple(end_current_session(job.work_sessions, now=now)),
    )


def retry_job(job: Job, reason: str, *, now: Optional[datetime] = None) -> Job:
    """Send a failed job back to PENDING as an ANCHOR, recording why it failed."""

    _require_status(job, JobStatus.FAILED, "retry job")
    note = FailureNote(timestamp=now or utc_now(), reason=reason.strip())
    return replace(
        job,
        status=JobStatus.PENDING,
        type=JobType.ANCHOR,
        failure_history=(*job.failure_history, note),
    )


def milestone_ready_for_verification(jobs: Sequence[Job]) -> bool:
    """True when a milestone has jobs and every one of them is completed."""

    return bool(jobs) and all(job.status == JobStatus.COMPLETED for job in jobs)
