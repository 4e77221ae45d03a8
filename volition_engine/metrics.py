"""Execution outcome metrics."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import numpy as np

from volition_engine.schema import Job, JobStatus, utc_now
from volition_engine.work_sessions import total_duration


def compute_metrics(jobs: Sequence[Job], *, now: Optional[datetime] = None) -> dict:
    """Compute completion, failure, tracked time and estimate accuracy metrics."""

    if not jobs:
        return {
            "completion_rate": 0.0,
            "failure_rate": 0.0,
            "total_jobs": 0,
            "tracked_seconds": 0,
            "estimate_ratio": 0.0,
        }

    now = now or utc_now()
    statuses = np.array([job.status.value for job in jobs])
    tracked = np.array([total_duration(job.work_sessions, now=now) for job in jobs], dtype=float)

    # tracked minutes over estimated minutes, completed jobs only
    ratios = [
        seconds / 60.0 / job.est_minutes
        for job, seconds in zip(jobs, tracked)
        if job.status == JobStatus.COMPLETED and seconds > 0 and job.est_minutes > 0
    ]

    return {
        "completion_rate": float(np.mean(statuses == JobStatus.COMPLETED.value)),
        "failure_rate": float(np.mean(statuses == JobStatus.FAILED.value)),
        "total_jobs": len(jobs),
        "tracked_seconds": int(tracked.sum()),
        "estimate_ratio": float(np.mean(ratios)) if ratios else 0.0,
    }
