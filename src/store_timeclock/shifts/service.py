from __future__ import annotations

import logging
import uuid
from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..common.validators import optional_grace_minutes, require_non_empty
from ..core.exceptions import ValidationError
from ..schedules.repository import ScheduleRepository
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

GRACE_FIELDS = ("clock_in_before", "clock_in_after", "clock_out_before", "clock_out_after")


class ShiftService:
    """Use case: manage shift definitions (admin)."""

    def __init__(self, shifts: ShiftRepository, schedules: ScheduleRepository):
        self._shifts = shifts
        self._schedules = schedules

    def list_shifts(self):
        return list(self._shifts.list_all())

    def save_shift(self, data: dict, *, shift_id: Optional[str] = None) -> Shift:
        """Create (no ``shift_id``) or update a shift from raw form/JSON data."""
        if shift_id is not None and not self._shifts.get_by_id(shift_id):
            raise ValidationError("Shift not found")

        name = require_non_empty(data.get("name") or "", "Shift name")
        short_name = (data.get("short_name") or "").strip() or name

        try:
            start_time = parse_hhmm(str(data.get("start_time") or ""))
            end_time = parse_hhmm(str(data.get("end_time") or ""))
        except ValueError:
            raise ValidationError("Shift times must be HH:MM") from None

        grace = {field: optional_grace_minutes(data.get(field), field) for field in GRACE_FIELDS}

        shift = Shift(
            shift_id=shift_id or (data.get("shift_id") or "").strip() or uuid.uuid4().hex[:8],
            name=name,
            short_name=short_name,
            start_time=start_time,
            end_time=end_time,
            color=(data.get("color") or "").strip(),
            **grace,
        )
        self._shifts.save(shift)
        return shift

    def delete_shift(self, *, shift_id: str) -> None:
        """Delete the shift and every schedule entry assigned to it."""
        if not self._shifts.get_by_id(shift_id):
            raise ValidationError("Shift not found")
        removed = self._schedules.delete_for_shift(shift_id)
        if not self._shifts.delete(shift_id):
            raise ValidationError("Deleting shift failed")
        logger.info("Deleted shift %s with %d schedule entries", shift_id, removed)
