from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import hours_between
from ..core.enums import ClockAction, LiveState


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công.

    ``late_hours``/``early_leave_hours`` are None when the employee was not
    late / did not leave early; they are never stored as 0.
    """

    attendance_id: int
    employee_id: int
    clock_in: datetime
    clock_out: Optional[datetime] = None
    late_hours: Optional[float] = None
    early_leave_hours: Optional[float] = None
    clock_in_edited: bool = False
    clock_out_edited: bool = False

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    @property
    def worked_hours(self) -> Optional[float]:
        if self.clock_out is None:
            return None
        return hours_between(self.clock_in, self.clock_out)


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive [start, end] interval in which a clock action is allowed."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class ClockResult:
    action: ClockAction
    record: Optional[AttendanceRecord]
    deviation_hours: Optional[float] = None
    distance_m: Optional[int] = None


@dataclass(frozen=True)
class LiveStatusRow:
    employee_id: int
    employee_name: str
    state: LiveState
    since: Optional[datetime]
    store_name: str


@dataclass(frozen=True)
class ActivityEvent:
    attendance_id: int
    employee_id: int
    employee_name: str
    action: ClockAction
    at: datetime
