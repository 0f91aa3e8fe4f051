from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, time, timedelta
from typing import Optional

from ...common.datetime_utils import at_time
from ...core.enums import ClockAction
from ...core.exceptions import OutsideTimeWindowError
from ...shifts.model import Shift
from ..model import TimeWindow


class ClockStrategy(ABC):
    """Strategy Pattern: window and deviation rules for one clock action.

    Both rules anchor the shift boundary on the calendar day of ``now``.
    """

    action: ClockAction

    @abstractmethod
    def boundary(self, shift: Shift) -> time:
        raise NotImplementedError

    @abstractmethod
    def grace_minutes(self, shift: Shift) -> tuple[int, int]:
        """(before, after) tolerance around the boundary."""

        raise NotImplementedError

    @abstractmethod
    def deviation_hours(self, *, shift: Shift, now: datetime) -> Optional[float]:
        raise NotImplementedError

    def window(self, *, shift: Shift, now: datetime) -> TimeWindow:
        anchor = at_time(now.date(), self.boundary(shift))
        before, after = self.grace_minutes(shift)
        return TimeWindow(start=anchor - timedelta(minutes=before), end=anchor + timedelta(minutes=after))

    def check_window(self, *, shift: Shift, now: datetime) -> TimeWindow:
        window = self.window(shift=shift, now=now)
        if not window.contains(now):
            raise OutsideTimeWindowError(
                action=self.action.value,
                window_start=window.start,
                window_end=window.end,
            )
        return window
