"""Core data schema for goals, jobs and work sessions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional


class JobType(str, Enum):
    """Energy/focus profile a job requires."""

    QUICK_WIN = "QUICK_WIN"
    DEEP_WORK = "DEEP_WORK"
    ANCHOR = "ANCHOR"


class JobStatus(str, Enum):
    """Lifecycle status of a job."""

    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class EnergyState(str, Enum):
    """User-reported capacity level."""

    HIGH = "HIGH"
    MED = "MED"
    LOW = "LOW"


DEFAULT_ENERGY_STATE = EnergyState.MED


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return an aware timestamp; naive values are taken to be UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class WorkSession:
    """One contiguous interval of focused work, open while ``end`` is None."""

    start: datetime
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class FailureNote:
    timestamp: datetime
    reason: str


@dataclass(frozen=True)
class Job:
    """A single actionable unit of work."""

    id: str
    job_cluster_id: str
    title: str
    type: JobType
    est_minutes: int
    status: JobStatus
    failure_count: int
    deadline: Optional[datetime]
    created_at: datetime
    work_sessions: tuple[WorkSession, ...] = ()
    failure_history: tuple[FailureNote, ...] = ()


@dataclass(frozen=True)
class JobCluster:
    """A grouping of related jobs under one milestone."""

    id: str
    milestone_id: str
    title: str
    created_at: datetime


class TrialTaskStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class TrialTask:
    """One day of the short trial plan a goal runs before full planning."""

    id: str
    goal_id: str
    day_number: int
    task_title: str
    est_minutes: int
    status: TrialTaskStatus
    scheduled_date: date
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    acceptance_criteria: Optional[str] = None
