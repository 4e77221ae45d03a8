from datetime import timedelta

from tests.helpers import make_job, ts

from volition_engine.metrics import compute_metrics
from volition_engine.schema import WorkSession

T0 = ts("2025-01-01T09:00:00+00:00")


def test_empty_metrics():
    assert compute_metrics([]) == {
        "completion_rate": 0.0,
        "failure_rate": 0.0,
        "total_jobs": 0,
        "tracked_seconds": 0,
        "estimate_ratio": 0.0,
    }


def test_metrics_over_jobs():
    jobs = [
        make_job("a", "ANCHOR", "COMPLETED", est_minutes=30, work_sessions=(WorkSession(T0, T0 + timedelta(minutes=45)),)),
        make_job("b", "QUICK_WIN", "FAILED", est_minutes=10, failure_count=1),
        make_job("c", "DEEP_WORK", "ACTIVE", work_sessions=(WorkSession(T0),)),
        make_job("d", "QUICK_WIN", "PENDING"),
    ]
    metrics = compute_metrics(jobs, now=T0 + timedelta(minutes=5))
    assert metrics["completion_rate"] == 0.25
    assert metrics["failure_rate"] == 0.25
    assert metrics["total_jobs"] == 4
    assert metrics["tracked_seconds"] == 45 * 60 + 5 * 60
    assert metrics["estimate_ratio"] == 1.5
