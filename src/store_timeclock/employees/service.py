from __future__ import annotations

import logging

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_non_empty, require_pin
from ..core.exceptions import ValidationError
from ..schedules.repository import ScheduleRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage employees (admin)."""

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        schedules: ScheduleRepository,
    ):
        self._employees = employees
        self._attendance = attendance
        self._schedules = schedules

    def list_employees(self):
        return list(self._employees.list_all())

    def create_employee(self, *, name: str, pin: str) -> Employee:
        name = require_non_empty(name, "Employee name")
        pin = require_pin(pin)
        employee_id = self._employees.create(name=name, pin=pin)
        return Employee(employee_id=employee_id, name=name, pin=pin)

    def update_employee(self, *, employee_id: int, name: str, pin: str) -> Employee:
        name = require_non_empty(name, "Employee name")
        pin = require_pin(pin)
        if not self._employees.get_by_id(int(employee_id)):
            raise ValidationError("Employee not found")
        if not self._employees.update(employee_id=int(employee_id), name=name, pin=pin):
            raise ValidationError("Updating employee failed")
        return Employee(employee_id=int(employee_id), name=name, pin=pin)

    def delete_employee(self, *, employee_id: int) -> None:
        """Delete the employee together with all attendance records and schedule entries."""
        employee_id = int(employee_id)
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee not found")

        # dependents before the employee row; the row survives a failed cascade
        removed_records = self._attendance.delete_for_employee(employee_id)
        removed_entries = self._schedules.delete_for_employee(employee_id)

        if not self._employees.delete_by_id(employee_id):
            raise ValidationError("Deleting employee failed")
        logger.info(
            "Deleted employee %s with %d attendance records and %d schedule entries",
            employee_id,
            removed_records,
            removed_entries,
        )
