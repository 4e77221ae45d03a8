"""Energy-aware job filtering and ordering."""

from __future__ import annotations

from dataclasses import dataclass
from math import inf
from typing import Iterable, Optional, Sequence, Union

from volition_engine.schema import EnergyState, Job, JobCluster, JobStatus, JobType, as_utc

EMPTY_LOW_ENERGY_MESSAGE = "No quick wins available. Consider breaking down a task."

_STATUS_PRIORITY = {
    JobStatus.ACTIVE: 1,
    JobStatus.PENDING: 2,
    JobStatus.COMPLETED: 3,
    JobStatus.FAILED: 4,
}

_ADMITTED_TYPES = {
    EnergyState.HIGH: frozenset(JobType),
    EnergyState.MED: frozenset({JobType.ANCHOR, JobType.QUICK_WIN}),
    EnergyState.LOW: frozenset({JobType.QUICK_WIN}),
}


@dataclass(frozen=True)
class ContextResult:
    """Jobs to present for the current energy state."""

    jobs: list[Job]
    is_empty: bool
    empty_state_message: Optional[str]


def _coerce_state(user_state: Union[EnergyState, str, None]) -> Optional[EnergyState]:
    if isinstance(user_state, EnergyState):
        return user_state
    if isinstance(user_state, str):
        try:
            return EnergyState(user_state.strip().upper())
        except ValueError:
            return None
    return None


def admitted_types(user_state: Union[EnergyState, str, None]) -> frozenset[JobType]:
    """Return the pending job types surfaced for an energy state.

    Unrecognized states admit every type.
    """

    state = _coerce_state(user_state)
    if state is None:
        return frozenset(JobType)
    return _ADMITTED_TYPES[state]


def _cluster_ranks(clusters: Iterable[JobCluster]) -> dict[str, int]:
    ordered = sorted(clusters, key=lambda cluster: as_utc(cluster.created_at))
    return {cluster.id: index for index, cluster in enumerate(ordered)}


def filter_jobs(
    jobs: Sequence[Job],
    user_state: Union[EnergyState, str, None],
    clusters: Optional[Sequence[JobCluster]] = None,
) -> ContextResult:
    """Select and order the jobs to surface for ``user_state``.

    Active jobs are always kept. Pending jobs are kept when their type is admitted
    by the energy state. Output is ordered by status, then cluster creation rank
    (when clusters are given, unknown clusters last), then job creation time.
    """

    allowed = admitted_types(user_state)
    active = [job for job in jobs if job.status == JobStatus.ACTIVE]
    pending = [job for job in jobs if job.status == JobStatus.PENDING and job.type in allowed]

    ranks = _cluster_ranks(clusters) if clusters else {}

    def sort_key(job: Job) -> tuple:
        cluster_rank = ranks.get(job.job_cluster_id, inf) if ranks else 0
        return (_STATUS_PRIORITY[job.status], cluster_rank, as_utc(job.created_at))

    ordered = sorted(active + pending, key=sort_key)

    is_empty = _coerce_state(user_state) == EnergyState.LOW and not ordered
    return ContextResult(
        jobs=ordered,
        is_empty=is_empty,
        empty_state_message=EMPTY_LOW_ENERGY_MESSAGE if is_empty else None,
    )
