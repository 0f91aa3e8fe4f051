from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ...common.datetime_utils import at_time, hours_between
from ...core.enums import ClockAction
from ...shifts.model import Shift
from .base import ClockStrategy


class ClockInStrategy(ClockStrategy):
    """Clock-in around shift start; lateness measured from the start itself."""

    action = ClockAction.CLOCK_IN

    def boundary(self, shift: Shift) -> time:
        return shift.start_time

    def grace_minutes(self, shift: Shift) -> tuple[int, int]:
        return shift.clock_in_before_minutes, shift.clock_in_after_minutes

    def deviation_hours(self, *, shift: Shift, now: datetime) -> Optional[float]:
        late = hours_between(at_time(now.date(), shift.start_time), now)
        return late if late > 0 else None
