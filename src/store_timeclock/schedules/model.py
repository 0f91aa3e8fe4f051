from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ScheduleEntry:
    """One employee assigned to one shift at one store for one calendar date."""

    employee_id: int
    work_date: date
    shift_id: str
    store_id: int


@dataclass(frozen=True)
class WeekDaySchedule:
    work_date: date
    weekday: str
    shift_short_name: str | None
    store_name: str | None
    is_today: bool
