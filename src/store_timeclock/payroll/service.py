from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_hhmm, is_weekend, iter_month_days, month_bounds
from ..core.enums import DayStatus
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.model import ScheduleEntry
from ..schedules.repository import ScheduleRepository
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import DailyDetailRow, EmployeeMonthSummary, fmt_hours


class PayrollReportService:
    """Monthly summary and per-day detail reports.

    Reports are derived from one read of each collection and never write back.
    Hour totals are accumulated in clock-in order, so the same input always
    produces the same floats.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        schedules: ScheduleRepository,
        shifts: ShiftRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._schedules = schedules
        self._shifts = shifts
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()

    def build_monthly_summary(
        self,
        *,
        year: int,
        month: int,
        employee_id: Optional[int] = None,
    ) -> list[EmployeeMonthSummary]:
        start, end = month_bounds(year, month)
        employees = [e for e in self._employees.list_all() if employee_id is None or e.employee_id == employee_id]

        records = self._records_in_month(year, month, employee_id=employee_id)
        schedule = self._schedule_index(start, end, employee_id=employee_id)
        shifts = self._shift_index()

        by_employee: dict[int, list[AttendanceRecord]] = {}
        for r in records:
            by_employee.setdefault(r.employee_id, []).append(r)

        return [
            self._summarize(e.employee_id, e.name, by_employee.get(e.employee_id, []), schedule, shifts)
            for e in employees
        ]

    def _summarize(
        self,
        employee_id: int,
        employee_name: str,
        records: Sequence[AttendanceRecord],
        schedule: dict[tuple[int, date], ScheduleEntry],
        shifts: dict[str, Shift],
    ) -> EmployeeMonthSummary:
        total_hours = 0.0
        total_late_hours = 0.0
        total_overtime_hours = 0.0
        late_count = 0
        overtime_count = 0
        early_leave_count = 0

        for r in records:
            worked = self._calculator.worked_hours(r)
            if worked is not None:
                total_hours += worked

            if r.late_hours is not None and r.late_hours > 0:
                total_late_hours += r.late_hours
                late_count += 1

            if r.early_leave_hours is not None and r.early_leave_hours > 0:
                early_leave_count += 1

            if r.clock_out is None:
                continue
            entry = schedule.get((employee_id, r.clock_in.date()))
            shift = shifts.get(entry.shift_id) if entry else None
            if shift is None:
                continue
            overtime = self._calculator.overtime_hours(r, shift)
            if overtime is not None:
                total_overtime_hours += overtime
                overtime_count += 1

        return EmployeeMonthSummary(
            employee_id=employee_id,
            employee_name=employee_name,
            total_hours=total_hours,
            total_late_hours=total_late_hours,
            total_overtime_hours=total_overtime_hours,
            late_count=late_count,
            overtime_count=overtime_count,
            early_leave_count=early_leave_count,
        )

    def build_daily_detail(self, *, year: int, month: int, employee_id: int) -> list[DailyDetailRow]:
        """Exactly one row per calendar day of the month, ascending."""
        if not self._employees.get_by_id(int(employee_id)):
            raise ValidationError("Employee not found")

        start, end = month_bounds(year, month)
        records = self._records_in_month(year, month, employee_id=int(employee_id))
        schedule = self._schedule_index(start, end, employee_id=int(employee_id))
        shifts = self._shift_index()

        first_by_day: dict[date, AttendanceRecord] = {}
        for r in records:
            first_by_day.setdefault(r.clock_in.date(), r)

        rows: list[DailyDetailRow] = []
        for day in iter_month_days(year, month):
            record = first_by_day.get(day)
            entry = schedule.get((int(employee_id), day))
            shift = shifts.get(entry.shift_id) if entry else None
            weekend = is_weekend(day)

            if record:
                status = DayStatus.HAS_ATTENDANCE
            elif weekend:
                status = DayStatus.WEEKEND_NO_SHIFT
            elif shift:
                status = DayStatus.ABSENT_WITH_SHIFT
            else:
                status = DayStatus.NO_SCHEDULE_ASSIGNED

            if shift:
                shift_name = shift.short_name
            else:
                shift_name = "-" if weekend else "off"

            rows.append(
                DailyDetailRow(
                    work_date=day,
                    weekday=day.strftime("%a"),
                    shift_name=shift_name,
                    clock_in=format_hhmm(record.clock_in) if record else "-",
                    clock_out=format_hhmm(record.clock_out) if record else "-",
                    late_hours=_positive_or_dash(record.late_hours if record else None),
                    early_leave_hours=_positive_or_dash(record.early_leave_hours if record else None),
                    worked_hours=_positive_or_dash(self._calculator.worked_hours(record) if record else None),
                    status=status,
                )
            )
        return rows

    def _records_in_month(self, year: int, month: int, *, employee_id: Optional[int]) -> list[AttendanceRecord]:
        start, end = month_bounds(year, month)
        rows = self._attendance.list_between(start=start, end=end, employee_id=employee_id)
        out = [r for r in rows if r.clock_in.year == year and r.clock_in.month == month]
        out.sort(key=lambda r: (r.clock_in, r.attendance_id))
        return out

    def _schedule_index(self, start: date, end: date, *, employee_id: Optional[int]) -> dict[tuple[int, date], ScheduleEntry]:
        return {(e.employee_id, e.work_date): e for e in self._schedules.list_range(start=start, end=end, employee_id=employee_id)}

    def _shift_index(self) -> dict[str, Shift]:
        return {s.shift_id: s for s in self._shifts.list_all()}


def _positive_or_dash(value: Optional[float]) -> str:
    if value is None or value <= 0:
        return "-"
    return fmt_hours(value)
