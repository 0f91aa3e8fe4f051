from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceRecord
from ...shifts.model import Shift


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_hours(self, record: AttendanceRecord) -> Optional[float]:
        raise NotImplementedError

    @abstractmethod
    def overtime_hours(self, record: AttendanceRecord, shift: Shift) -> Optional[float]:
        raise NotImplementedError
