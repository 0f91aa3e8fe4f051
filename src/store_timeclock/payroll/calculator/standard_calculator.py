from __future__ import annotations

from typing import Optional

from .base import PayrollCalculator
from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import at_time, hours_between
from ...shifts.model import Shift


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: worked = out - in; overtime = out - shift end when positive."""

    def worked_hours(self, record: AttendanceRecord) -> Optional[float]:
        return record.worked_hours

    def overtime_hours(self, record: AttendanceRecord, shift: Shift) -> Optional[float]:
        if record.clock_out is None:
            return None
        # shift end is anchored on the clock-out day
        shift_end = at_time(record.clock_out.date(), shift.end_time)
        if record.clock_out <= shift_end:
            return None
        return hours_between(shift_end, record.clock_out)
