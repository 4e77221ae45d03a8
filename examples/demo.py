"""Demo script for volition-engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from volition_engine.adapters.json_adapter import parse
from volition_engine.context_engine import filter_jobs
from volition_engine.lifecycle import start_job
from volition_engine.metrics import compute_metrics
from volition_engine.schema import EnergyState


def main() -> None:
    snapshot = parse("examples/sample_jobs.json")
    for state in EnergyState:
        result = filter_jobs(snapshot.jobs, state, snapshot.clusters)
        print(f"{state.value}:", [job.title for job in result.jobs], result.empty_state_message or "")

    pending = next(job for job in snapshot.jobs if job.status.value == "PENDING")
    started = start_job(pending)
    print("Started:", started.title, started.work_sessions[-1].start.isoformat())
    print("Metrics:", compute_metrics(snapshot.jobs))


if __name__ == "__main__":
    main()
