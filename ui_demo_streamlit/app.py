"""Streamlit execution dashboard for volition-engine."""

from __future__ import annotations

import tempfile
from collections import Counter
from pathlib import Path
from typing import Any

from volition_engine.adapters import csv_adapter, json_adapter
from volition_engine.board import JobBoard
from volition_engine.config import load_config
from volition_engine.energy import EnergySettings
from volition_engine.lifecycle import (
    JobTransitionError,
    mark_job_done,
    mark_job_failed,
    pause_job,
    resume_job,
    start_job,
)
from volition_engine.metrics import compute_metrics
from volition_engine.schema import EnergyState, JobStatus
from volition_engine.work_sessions import (
    current_session_duration,
    format_duration,
    is_session_active,
    total_duration,
)

STATUSES = [status.value for status in JobStatus]
DEMO_DATA = "examples/sample_jobs.json"


def _parse_snapshot_from_path(file_path: str) -> json_adapter.JobSnapshot:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return json_adapter.JobSnapshot(jobs=csv_adapter.parse(file_path))
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> json_adapter.JobSnapshot:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return _parse_snapshot_from_path(temp_path)


def _build_summary(jobs: list) -> dict[str, Any]:
    status_counts = Counter(job.status.value for job in jobs)
    return {
        "total_jobs": len(jobs),
        "status_counts": {status: status_counts.get(status, 0) for status in STATUSES},
    }


def run_engine(board: JobBoard, now=None) -> dict[str, Any]:
    """Read the board's current view and metrics into a UI-friendly payload."""

    result = board.result
    jobs = list(board.jobs)
    rows = [
        {
            "id": job.id,
            "title": job.title,
            "type": job.type.value,
            "status": job.status.value,
            "est_minutes": job.est_minutes,
            "tracked": format_duration(total_duration(job.work_sessions, now=now)),
            "running": is_session_active(job.work_sessions),
        }
        for job in result.jobs
    ]
    return {
        "summary": _build_summary(jobs),
        "rows": rows,
        "is_empty": result.is_empty,
        "message": result.empty_state_message,
        "metrics": compute_metrics(jobs, now=now),
    }


def apply_action(snapshot: json_adapter.JobSnapshot, job_id: str, action: str) -> json_adapter.JobSnapshot:
    """Apply a lifecycle action to one job and return the updated snapshot."""

    transitions = {
        "start": start_job,
        "pause": pause_job,
        "resume": resume_job,
        "done": mark_job_done,
        "fail": mark_job_failed,
    }
    if action not in transitions:
        raise ValueError(f"Unknown action '{action}'")
    jobs = [transitions[action](job) if job.id == job_id else job for job in snapshot.jobs]
    return json_adapter.JobSnapshot(jobs=jobs, clusters=snapshot.clusters)


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Volition Engine", layout="wide")
    st.title("Volition Engine: Execution Dashboard")

    config = load_config()
    if "settings" not in st.session_state:
        st.session_state.settings = EnergySettings(config.settings_path, default=config.default_energy_state)
    settings: EnergySettings = st.session_state.settings
    if "board" not in st.session_state:
        st.session_state.board = JobBoard(settings)
    board: JobBoard = st.session_state.board

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload job export", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        states = [state.value for state in EnergyState]
        energy = st.radio("Energy", options=states, index=states.index(settings.get().value), horizontal=True)
        settings.set(energy)

    try:
        if "snapshot" not in st.session_state or st.sidebar.button("Reload data"):
            if use_demo:
                st.session_state.snapshot = _parse_snapshot_from_path(DEMO_DATA)
            elif uploaded is not None:
                st.session_state.snapshot = _parse_uploaded(uploaded)
            else:
                st.info("Upload a CSV/JSON job export or enable 'Load demo dataset'.")
                return
    except ValueError as exc:
        st.error(f"Input error: {exc}")
        return

    snapshot = st.session_state.snapshot
    board.update(snapshot.jobs, snapshot.clusters or None)
    result = run_engine(board)

    st.subheader("A) Summary")
    c1, c2, c3 = st.columns(3)
    c1.metric("Jobs", result["summary"]["total_jobs"])
    c2.metric("Completion rate", f"{result['metrics']['completion_rate'] * 100:.1f}%")
    c3.metric("Tracked time", format_duration(result["metrics"]["tracked_seconds"]))
    st.table([result["summary"]["status_counts"]])

    st.subheader("B) Up next")
    if result["is_empty"]:
        st.warning(result["message"])
    for row in result["rows"]:
        cols = st.columns([4, 2, 2, 2, 3])
        cols[0].write(f"**{row['title']}**")
        cols[1].write(row["type"])
        cols[2].write(row["status"])
        cols[3].write(row["tracked"])
        if row["status"] == "PENDING":
            actions = ["start"]
        elif row["running"]:
            actions = ["pause", "done", "fail"]
        else:
            actions = ["resume", "done", "fail"]
        buttons = cols[4].columns(len(actions))
        for button, action in zip(buttons, actions):
            if button.button(action, key=f"{action}-{row['id']}"):
                try:
                    st.session_state.snapshot = apply_action(snapshot, row["id"], action)
                except JobTransitionError as exc:
                    st.error(str(exc))
                    return
                st.rerun()

    running = [job for job in snapshot.jobs if is_session_active(job.work_sessions)]
    if running:
        st.subheader("C) Current session")
        for job in running:
            st.write(f"{job.title}: {format_duration(current_session_duration(job.work_sessions))}")


if __name__ == "__main__":
    main()
