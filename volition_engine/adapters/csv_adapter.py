"""CSV adapter for job exports."""

from __future__ import annotations

import csv
from datetime import datetime

from volition_engine.schema import Job, JobStatus, JobType

_REQUIRED_FIELDS = ("id", "job_cluster_id", "title", "type", "status", "created_at")


def _timestamp(raw: str, row_number: int, name: str) -> datetime:
    try:
        return datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Row {row_number}: malformed {name}") from exc


def _count(raw, row_number: int, name: str) -> int:
    if raw in (None, ""):
        return 0
    try:
        return int(raw)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Row {row_number}: invalid {name}") from exc


def _parse_row(row: dict, row_number: int) -> Job:
    missing = [name for name in _REQUIRED_FIELDS if not row.get(name)]
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    job_type = row["type"].strip()
    if job_type not in JobType.__members__:
        raise ValueError(f"Row {row_number}: invalid type '{job_type}'")

    status = row["status"].strip()
    if status not in JobStatus.__members__:
        raise ValueError(f"Row {row_number}: invalid status '{status}'")

    deadline_raw = row.get("deadline")
    return Job(
        id=row["id"].strip(),
        job_cluster_id=row["job_cluster_id"].strip(),
        title=row["title"].strip(),
        type=JobType[job_type],
        est_minutes=_count(row.get("est_minutes"), row_number, "est_minutes"),
        status=JobStatus[status],
        failure_count=_count(row.get("failure_count"), row_number, "failure_count"),
        deadline=_timestamp(deadline_raw, row_number, "deadline") if deadline_raw else None,
        created_at=_timestamp(row["created_at"], row_number, "created_at"),
    )


def parse(file_path: str) -> list[Job]:
    """Parse a CSV file with one job per row."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        jobs: list[Job] = []
        for row_number, row in enumerate(reader, start=2):
            jobs.append(_parse_row(row, row_number))
        return jobs
