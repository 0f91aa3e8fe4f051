from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ScheduleEntry


class ScheduleRepository(Protocol):
    def get_for_employee_and_date(self, *, employee_id: int, work_date: date) -> Optional[ScheduleEntry]:
        raise NotImplementedError

    def upsert(self, entry: ScheduleEntry) -> None:
        """Create or replace the entry keyed by (employee_id, work_date)."""

        raise NotImplementedError

    def delete_for_employee_and_date(self, *, employee_id: int, work_date: date) -> bool:
        raise NotImplementedError

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[ScheduleEntry]:
        raise NotImplementedError

    def delete_for_employee(self, employee_id: int) -> int:
        """Returns number of entries removed."""

        raise NotImplementedError

    def delete_for_shift(self, shift_id: str) -> int:
        raise NotImplementedError
