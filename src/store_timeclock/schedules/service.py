from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftRepository
from ..stores.repository import StoreRepository
from ..common.datetime_utils import week_start
from .model import ScheduleEntry, WeekDaySchedule
from .repository import ScheduleRepository


class ScheduleService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        employees: EmployeeRepository,
        shifts: ShiftRepository,
        stores: StoreRepository,
    ):
        self._schedules = schedules
        self._employees = employees
        self._shifts = shifts
        self._stores = stores

    def assign(
        self,
        *,
        employee_id: int,
        work_date: date,
        shift_id: Optional[str],
        store_id: Optional[int] = None,
    ) -> Optional[ScheduleEntry]:
        """Upsert the (employee, date) entry; ``shift_id=None`` clears the day."""
        if not self._employees.get_by_id(int(employee_id)):
            raise ValidationError("Employee not found")

        if shift_id is None:
            self._schedules.delete_for_employee_and_date(employee_id=int(employee_id), work_date=work_date)
            return None

        if not self._shifts.get_by_id(shift_id):
            raise ValidationError("Shift not found")
        if store_id is None or not self._stores.get_by_id(int(store_id)):
            raise ValidationError("Store not found")

        entry = ScheduleEntry(employee_id=int(employee_id), work_date=work_date, shift_id=shift_id, store_id=int(store_id))
        self._schedules.upsert(entry)
        return entry

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None):
        if end < start:
            raise ValidationError("End date must not be before start date")
        return list(self._schedules.list_range(start=start, end=end, employee_id=employee_id))

    def week_for_employee(self, *, employee_id: int, today: date) -> list[WeekDaySchedule]:
        """Monday..Sunday of the week containing ``today``."""
        monday = week_start(today)
        sunday = monday + timedelta(days=6)
        entries = {e.work_date: e for e in self._schedules.list_range(start=monday, end=sunday, employee_id=int(employee_id))}

        out: list[WeekDaySchedule] = []
        for offset in range(7):
            day = monday + timedelta(days=offset)
            entry = entries.get(day)
            shift = self._shifts.get_by_id(entry.shift_id) if entry else None
            store = self._stores.get_by_id(entry.store_id) if entry else None
            out.append(
                WeekDaySchedule(
                    work_date=day,
                    weekday=day.strftime("%A"),
                    shift_short_name=shift.short_name if shift else None,
                    store_name=store.name if store else None,
                    is_today=day == today,
                )
            )
        return out
