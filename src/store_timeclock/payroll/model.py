from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import DayStatus

DAY_STATUS_LABELS = {
    DayStatus.HAS_ATTENDANCE: "Clocked",
    DayStatus.WEEKEND_NO_SHIFT: "Weekend",
    DayStatus.ABSENT_WITH_SHIFT: "Absent",
    DayStatus.NO_SCHEDULE_ASSIGNED: "No schedule",
}


def fmt_hours(value: float) -> str:
    return f"{value:.2f}"


@dataclass(frozen=True)
class EmployeeMonthSummary:
    employee_id: int
    employee_name: str
    total_hours: float
    total_late_hours: float
    total_overtime_hours: float
    late_count: int
    overtime_count: int
    early_leave_count: int

    def as_row(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "total_hours": fmt_hours(self.total_hours),
            "total_late_hours": fmt_hours(self.total_late_hours),
            "total_overtime_hours": fmt_hours(self.total_overtime_hours),
            "late_count": self.late_count,
            "overtime_count": self.overtime_count,
            "early_leave_count": self.early_leave_count,
        }


@dataclass(frozen=True)
class DailyDetailRow:
    work_date: date
    weekday: str
    shift_name: str
    clock_in: str
    clock_out: str
    late_hours: str
    early_leave_hours: str
    worked_hours: str
    status: DayStatus

    @property
    def status_label(self) -> str:
        return DAY_STATUS_LABELS[self.status]

    def as_row(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "weekday": self.weekday,
            "shift_name": self.shift_name,
            "clock_in": self.clock_in,
            "clock_out": self.clock_out,
            "late_hours": self.late_hours,
            "early_leave_hours": self.early_leave_hours,
            "worked_hours": self.worked_hours,
            "status": self.status.value,
            "status_label": self.status_label,
        }
