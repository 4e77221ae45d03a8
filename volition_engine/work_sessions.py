"""Work session timer helpers.

Sessions are kept as an ordered sequence where only the last entry may be open.
Every helper returns a new list and leaves its input untouched; persisting the
result is up to the caller.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from volition_engine.schema import WorkSession, as_utc, utc_now


def _elapsed_seconds(start: datetime, end: datetime) -> int:
    return int((as_utc(end) - as_utc(start)).total_seconds())


def start_session(sessions: Sequence[WorkSession], *, now: Optional[datetime] = None) -> list[WorkSession]:
    """Append a new open session starting at ``now``.

    A session that is still open is closed at the same instant first.
    """

    now = now or utc_now()
    updated = end_current_session(sessions, now=now)
    updated.append(WorkSession(start=now))
    return updated


def end_current_session(sessions: Sequence[WorkSession], *, now: Optional[datetime] = None) -> list[WorkSession]:
    """Close the last session if it is open; otherwise return the sessions unchanged."""

    updated = list(sessions)
    if not updated or not updated[-1].is_open:
        return updated
    updated[-1] = replace(updated[-1], end=now or utc_now())
    return updated


def total_duration(sessions: Sequence[WorkSession], *, now: Optional[datetime] = None) -> int:
    """Total tracked seconds, counting an open session up to ``now``."""

    now = now or utc_now()
    return sum(_elapsed_seconds(session.start, session.end or now) for session in sessions)


def current_session(sessions: Sequence[WorkSession]) -> Optional[WorkSession]:
    if not sessions:
        return None
    last = sessions[-1]
    return last if last.is_open else None


def is_session_active(sessions: Sequence[WorkSession]) -> bool:
    return current_session(sessions) is not None


def current_session_duration(sessions: Sequence[WorkSession], *, now: Optional[datetime] = None) -> int:
    session = current_session(sessions)
    if session is None:
        return 0
    return _elapsed_seconds(session.start, now or utc_now())


def format_duration(seconds: int) -> str:
    """Format seconds as ``HH:MM:SS`` (an hour or more) or ``MM:SS``."""

    seconds = max(0, int(seconds))
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"
