from tests.helpers import make_cluster, make_job

from volition_engine.context_engine import EMPTY_LOW_ENERGY_MESSAGE, admitted_types, filter_jobs
from volition_engine.schema import EnergyState, JobType


def mixed_jobs():
    return [
        make_job("a1", "DEEP_WORK", "ACTIVE", "2025-01-01T12:00:00+00:00"),
        make_job("p1", "QUICK_WIN", "PENDING", "2025-01-01T09:00:00+00:00"),
        make_job("p2", "DEEP_WORK", "PENDING", "2025-01-01T10:00:00+00:00"),
        make_job("p3", "ANCHOR", "PENDING", "2025-01-01T11:00:00+00:00"),
        make_job("c1", "QUICK_WIN", "COMPLETED", "2025-01-01T08:00:00+00:00"),
        make_job("f1", "QUICK_WIN", "FAILED", "2025-01-01T08:30:00+00:00"),
    ]


def ids(result):
    return [job.id for job in result.jobs]


def test_med_excludes_pending_deep_work():
    jobs = [
        make_job("a", "DEEP_WORK", "ACTIVE", "2025-01-01T09:00:00+00:00"),
        make_job("b", "QUICK_WIN", "PENDING", "2025-01-01T09:01:00+00:00"),
        make_job("c", "DEEP_WORK", "PENDING", "2025-01-01T09:02:00+00:00"),
    ]
    result = filter_jobs(jobs, EnergyState.MED)
    assert ids(result) == ["a", "b"]
    assert result.is_empty is False
    assert result.empty_state_message is None


def test_active_jobs_always_included():
    for state in (EnergyState.HIGH, EnergyState.MED, EnergyState.LOW, "SLEEPY"):
        assert "a1" in ids(filter_jobs(mixed_jobs(), state))


def test_low_keeps_only_quick_win_pending():
    result = filter_jobs(mixed_jobs(), EnergyState.LOW)
    pending = [job for job in result.jobs if job.status.value == "PENDING"]
    assert [job.id for job in pending] == ["p1"]
    assert all(job.type == JobType.QUICK_WIN for job in pending)


def test_high_admits_all_pending_types_and_drops_finished_jobs():
    assert ids(filter_jobs(mixed_jobs(), EnergyState.HIGH)) == ["a1", "p1", "p2", "p3"]


def test_unknown_state_fails_open():
    assert ids(filter_jobs(mixed_jobs(), "SLEEPY")) == ["a1", "p1", "p2", "p3"]
    assert ids(filter_jobs(mixed_jobs(), None)) == ["a1", "p1", "p2", "p3"]
    assert admitted_types("bogus") == frozenset(JobType)


def test_state_names_are_accepted():
    assert ids(filter_jobs(mixed_jobs(), "med")) == ["a1", "p1", "p3"]


def test_empty_low_shows_advisory():
    result = filter_jobs([], EnergyState.LOW)
    assert result.jobs == []
    assert result.is_empty is True
    assert result.empty_state_message == EMPTY_LOW_ENERGY_MESSAGE


def test_empty_med_has_no_advisory():
    result = filter_jobs([], EnergyState.MED)
    assert result.is_empty is False
    assert result.empty_state_message is None


def test_orders_by_cluster_rank_then_created_at():
    clusters = [
        make_cluster("late", "2025-01-03T00:00:00+00:00"),
        make_cluster("early", "2025-01-01T00:00:00+00:00"),
    ]
    jobs = [
        make_job("x", "QUICK_WIN", "PENDING", "2025-01-01T08:00:00+00:00", cluster_id="late"),
        make_job("y", "QUICK_WIN", "PENDING", "2025-01-02T08:00:00+00:00", cluster_id="early"),
        make_job("z", "QUICK_WIN", "PENDING", "2025-01-01T07:00:00+00:00", cluster_id="early"),
        make_job("orphan", "QUICK_WIN", "PENDING", "2025-01-01T00:00:00+00:00", cluster_id="gone"),
        make_job("busy", "QUICK_WIN", "ACTIVE", "2025-01-05T00:00:00+00:00", cluster_id="late"),
    ]
    result = filter_jobs(jobs, EnergyState.HIGH, clusters)
    assert ids(result) == ["busy", "z", "y", "x", "orphan"]


def test_without_clusters_orders_by_created_at():
    jobs = [
        make_job("x", "QUICK_WIN", "PENDING", "2025-01-02T00:00:00+00:00", cluster_id="b"),
        make_job("y", "QUICK_WIN", "PENDING", "2025-01-01T00:00:00+00:00", cluster_id="a"),
    ]
    assert ids(filter_jobs(jobs, EnergyState.HIGH)) == ["y", "x"]
    assert ids(filter_jobs(jobs, EnergyState.HIGH, [])) == ["y", "x"]


def test_equal_keys_keep_input_order_and_repeat_identically():
    jobs = [make_job(str(i), "QUICK_WIN", "PENDING") for i in range(5)]
    first = filter_jobs(jobs, EnergyState.LOW)
    second = filter_jobs(jobs, EnergyState.LOW)
    assert ids(first) == ["0", "1", "2", "3", "4"]
    assert first == second


def test_naive_and_aware_timestamps_mix():
    jobs = [
        make_job("naive", "QUICK_WIN", "PENDING", "2025-01-02T00:00:00"),
        make_job("aware", "QUICK_WIN", "PENDING", "2025-01-01T00:00:00+00:00"),
    ]
    assert ids(filter_jobs(jobs, EnergyState.LOW)) == ["aware", "naive"]


def test_input_is_not_mutated():
    jobs = mixed_jobs()
    snapshot = list(jobs)
    filter_jobs(jobs, EnergyState.LOW)
    assert jobs == snapshot
