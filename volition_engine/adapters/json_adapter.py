"""JSON adapter for job and cluster exports."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from volition_engine.schema import FailureNote, Job, JobCluster, JobStatus, JobType, WorkSession

_REQUIRED_JOB_FIELDS = ("id", "job_cluster_id", "title", "type", "status", "created_at")
_REQUIRED_CLUSTER_FIELDS = ("id", "milestone_id", "title", "created_at")


@dataclass
class JobSnapshot:
    """Jobs and clusters for one scope, as exported from the store."""

    jobs: list[Job] = field(default_factory=list)
    clusters: list[JobCluster] = field(default_factory=list)


def _parse_timestamp(value, label: str) -> datetime:
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: malformed timestamp") from exc


def _parse_int(value, label: str, name: str) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: invalid {name}") from exc


def _parse_sessions(raw, label: str) -> tuple[WorkSession, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValueError(f"{label}: work_sessions must be a list")
    sessions = []
    for entry in raw:
        if not isinstance(entry, dict) or not entry.get("start"):
            raise ValueError(f"{label}: work session without start")
        end = entry.get("end")
        sessions.append(
            WorkSession(
                start=_parse_timestamp(entry["start"], label),
                end=_parse_timestamp(end, label) if end else None,
            )
        )
    if any(session.is_open for session in sessions[:-1]):
        raise ValueError(f"{label}: only the last work session may be open")
    return tuple(sessions)


def _parse_failures(raw, label: str) -> tuple[FailureNote, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValueError(f"{label}: failure_history must be a list")
    if not all(isinstance(entry, dict) for entry in raw):
        raise ValueError(f"{label}: failure notes must be objects")
    return tuple(
        FailureNote(timestamp=_parse_timestamp(entry.get("timestamp"), label), reason=str(entry.get("reason", "")))
        for entry in raw
    )


def _parse_job(item: dict, index: int) -> Job:
    label = f"Job {index}"
    if not isinstance(item, dict):
        raise ValueError(f"{label}: expected an object")
    missing = [name for name in _REQUIRED_JOB_FIELDS if not item.get(name)]
    if missing:
        raise ValueError(f"{label}: missing required fields {missing}")

    try:
        job_type = JobType(str(item["type"]).strip())
    except ValueError as exc:
        raise ValueError(f"{label}: invalid type '{item['type']}'") from exc
    try:
        status = JobStatus(str(item["status"]).strip())
    except ValueError as exc:
        raise ValueError(f"{label}: invalid status '{item['status']}'") from exc

    deadline_raw = item.get("deadline")
    return Job(
        id=str(item["id"]).strip(),
        job_cluster_id=str(item["job_cluster_id"]).strip(),
        title=str(item["title"]).strip(),
        type=job_type,
        est_minutes=_parse_int(item.get("est_minutes"), label, "est_minutes"),
        status=status,
        failure_count=_parse_int(item.get("failure_count"), label, "failure_count"),
        deadline=_parse_timestamp(deadline_raw, label) if deadline_raw else None,
        created_at=_parse_timestamp(item["created_at"], label),
        work_sessions=_parse_sessions(item.get("work_sessions"), label),
        failure_history=_parse_failures(item.get("failure_history"), label),
    )


def _parse_cluster(item: dict, index: int) -> JobCluster:
    label = f"Cluster {index}"
    if not isinstance(item, dict):
        raise ValueError(f"{label}: expected an object")
    missing = [name for name in _REQUIRED_CLUSTER_FIELDS if not item.get(name)]
    if missing:
        raise ValueError(f"{label}: missing required fields {missing}")
    return JobCluster(
        id=str(item["id"]).strip(),
        milestone_id=str(item["milestone_id"]).strip(),
        title=str(item["title"]).strip(),
        created_at=_parse_timestamp(item["created_at"], label),
    )


def parse_payload(payload) -> JobSnapshot:
    """Build a snapshot from a decoded JSON list of jobs or a ``{jobs, clusters}`` object."""

    if isinstance(payload, list):
        raw_jobs, raw_clusters = payload, []
    elif isinstance(payload, dict):
        raw_jobs, raw_clusters = payload.get("jobs", []), payload.get("clusters") or []
    else:
        raise ValueError("JSON payload must be a list of jobs or an object with 'jobs'")

    if not isinstance(raw_jobs, list) or not isinstance(raw_clusters, list):
        raise ValueError("'jobs' and 'clusters' must be lists")

    return JobSnapshot(
        jobs=[_parse_job(item, i) for i, item in enumerate(raw_jobs, start=1)],
        clusters=[_parse_cluster(item, i) for i, item in enumerate(raw_clusters, start=1)],
    )


def parse(file_path: str) -> JobSnapshot:
    """Parse a JSON export into jobs and clusters."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)
    return parse_payload(payload)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _job_to_dict(job: Job) -> dict:
    return {
        "id": job.id,
        "job_cluster_id": job.job_cluster_id,
        "title": job.title,
        "type": job.type.value,
        "est_minutes": job.est_minutes,
        "status": job.status.value,
        "failure_count": job.failure_count,
        "deadline": _iso(job.deadline),
        "created_at": _iso(job.created_at),
        "work_sessions": [{"start": _iso(s.start), "end": _iso(s.end)} for s in job.work_sessions],
        "failure_history": [{"timestamp": _iso(n.timestamp), "reason": n.reason} for n in job.failure_history],
    }


def to_payload(snapshot: JobSnapshot) -> dict:
    return {
        "jobs": [_job_to_dict(job) for job in snapshot.jobs],
        "clusters": [
            {
                "id": cluster.id,
                "milestone_id": cluster.milestone_id,
                "title": cluster.title,
                "created_at": _iso(cluster.created_at),
            }
            for cluster in snapshot.clusters
        ],
    }


def dump(snapshot: JobSnapshot, file_path: str) -> None:
    with open(file_path, "w", encoding="utf-8") as handle:
        json.dump(to_payload(snapshot), handle, indent=2)
