from datetime import datetime

from volition_engine.schema import Job, JobCluster, JobStatus, JobType


def ts(value: str) -> datetime:
    return datetime.fromisoformat(value)


def make_job(job_id, job_type, status, created_at="2025-01-01T09:00:00+00:00", cluster_id="c1", **overrides) -> Job:
    fields = {
        "id": job_id,
        "job_cluster_id": cluster_id,
        "title": f"Job {job_id}",
        "type": JobType(job_type),
        "est_minutes": 30,
        "status": JobStatus(status),
        "failure_count": 0,
        "deadline": None,
        "created_at": ts(created_at),
    }
    fields.update(overrides)
    return Job(**fields)


def make_cluster(cluster_id, created_at, milestone_id="m1") -> JobCluster:
    return JobCluster(cluster_id, milestone_id, f"Cluster {cluster_id}", ts(created_at))
