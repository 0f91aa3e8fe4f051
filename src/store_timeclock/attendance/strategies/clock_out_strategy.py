from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ...common.datetime_utils import at_time, hours_between
from ...core.enums import ClockAction
from ...shifts.model import Shift
from .base import ClockStrategy


class ClockOutStrategy(ClockStrategy):
    """Clock-out around shift end; early leave measured up to the end itself."""

    action = ClockAction.CLOCK_OUT

    def boundary(self, shift: Shift) -> time:
        return shift.end_time

    def grace_minutes(self, shift: Shift) -> tuple[int, int]:
        return shift.clock_out_before_minutes, shift.clock_out_after_minutes

    def deviation_hours(self, *, shift: Shift, now: datetime) -> Optional[float]:
        early = hours_between(now, at_time(now.date(), shift.end_time))
        return early if early > 0 else None
