"""Print the jobs to surface for an energy state from a CSV/JSON job export."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from volition_engine.adapters import csv_adapter, json_adapter
from volition_engine.board import JobBoard
from volition_engine.config import configure_logging, load_config
from volition_engine.energy import EnergySettings
from volition_engine.work_sessions import format_duration, total_duration


def _load_snapshot(path: Path) -> json_adapter.JobSnapshot:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return json_adapter.JobSnapshot(jobs=csv_adapter.parse(str(path)))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    config = load_config()
    parser = argparse.ArgumentParser(description="Filter jobs by energy state")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON job export")
    parser.add_argument("--energy", choices=["HIGH", "MED", "LOW"], help="Energy state (saved to settings)")
    parser.add_argument("--settings", default=config.settings_path, help="Energy settings file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else config.log_level)

    settings = EnergySettings(args.settings, default=config.default_energy_state)
    snapshot = _load_snapshot(Path(args.data))
    board = JobBoard(settings, snapshot.jobs, snapshot.clusters or None)
    if args.energy:
        settings.set(args.energy)
    result = board.result
    board.close()

    report = {
        "energy_state": settings.get().value,
        "jobs": [
            {
                "id": job.id,
                "title": job.title,
                "type": job.type.value,
                "status": job.status.value,
                "tracked": format_duration(total_duration(job.work_sessions)),
            }
            for job in result.jobs
        ],
        "is_empty": result.is_empty,
        "message": result.empty_state_message,
    }
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
