from __future__ import annotations

from enum import Enum


class ClockAction(str, Enum):
    """Hành động chấm công tại kiosk."""

    CLOCK_IN = "clock-in"
    CLOCK_OUT = "clock-out"


class ClockFailureKind(str, Enum):
    """Lý do một lần chấm công bị từ chối."""

    NO_SCHEDULE_TODAY = "NoScheduleToday"
    SHIFT_NOT_FOUND = "ShiftNotFound"
    OUTSIDE_TIME_WINDOW = "OutsideTimeWindow"
    STORE_LOCATION_MISSING = "StoreLocationMissing"
    LOCATION_UNAVAILABLE = "LocationUnavailable"
    OUTSIDE_GEOFENCE = "OutsideGeofence"
    ALREADY_CLOCKED_IN = "AlreadyClockedIn"


class DayStatus(str, Enum):
    """Trạng thái một ngày trong báo cáo chi tiết."""

    HAS_ATTENDANCE = "HAS_ATTENDANCE"
    WEEKEND_NO_SHIFT = "WEEKEND_NO_SHIFT"
    ABSENT_WITH_SHIFT = "ABSENT_WITH_SHIFT"
    NO_SCHEDULE_ASSIGNED = "NO_SCHEDULE_ASSIGNED"


class LiveState(str, Enum):
    WORKING = "WORKING"
    CLOCKED_OUT = "CLOCKED_OUT"
    NOT_CLOCKED_IN = "NOT_CLOCKED_IN"
