from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        """The record with this employee id and no clock-out, if any."""

        raise NotImplementedError

    def list_between(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records whose clock-in date is within [start, end], ordered by clock-in."""

        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        """Latest records by ``clock_out or clock_in``, newest first."""

        raise NotImplementedError

    def latest_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_clock_in(
        self,
        *,
        employee_id: int,
        clock_in: datetime,
        late_hours: Optional[float] = None,
    ) -> int:
        raise NotImplementedError

    def close(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        early_leave_hours: Optional[float] = None,
    ) -> bool:
        raise NotImplementedError

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        clock_in: datetime,
        clock_out: Optional[datetime],
        clock_in_edited: bool,
        clock_out_edited: bool,
    ) -> bool:
        """Admin-only correction of timestamps."""

        raise NotImplementedError

    def delete_for_employee(self, employee_id: int) -> int:
        raise NotImplementedError
