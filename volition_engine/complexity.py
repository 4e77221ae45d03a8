"""Goal sizing rules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Union


class ComplexitySize(str, Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


@dataclass(frozen=True)
class Complexity:
    size: ComplexitySize
    estimated_total_hours: float
    projected_end_date: date


def size_for_hours(hours: float) -> ComplexitySize:
    """Bucket total effort: under 20h is small, over 100h is large."""

    if hours > 100:
        return ComplexitySize.LARGE
    if hours >= 20:
        return ComplexitySize.MEDIUM
    return ComplexitySize.SMALL


def projected_end_date(total_hours: float, hours_per_week: float, start: Union[date, datetime]) -> date:
    if hours_per_week <= 0:
        raise ValueError("hours_per_week must be positive")
    if isinstance(start, datetime):
        start = start.date()
    return start + timedelta(weeks=total_hours / hours_per_week)


def estimate_complexity(total_hours: float, hours_per_week: float, start: Union[date, datetime]) -> Complexity:
    return Complexity(
        size=size_for_hours(total_hours),
        estimated_total_hours=float(total_hours),
        projected_end_date=projected_end_date(total_hours, hours_per_week, start),
    )
