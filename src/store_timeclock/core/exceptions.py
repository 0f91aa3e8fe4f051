from __future__ import annotations

from datetime import datetime

from .enums import ClockFailureKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a PIN or admin password does not match."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class PositionUnavailableError(Exception):
    """Raised by position providers when no fix could be obtained."""


class ClockActionError(DomainError):
    """A single clock action was rejected.

    Every subclass carries a ``kind`` so callers can render a short message
    without matching on exception types.
    """

    kind: ClockFailureKind

    def details(self) -> dict:
        return {}


class NoScheduleTodayError(ClockActionError):
    kind = ClockFailureKind.NO_SCHEDULE_TODAY

    def __init__(self, message: str = "No schedule assigned for today"):
        super().__init__(message)


class ShiftNotFoundError(ClockActionError):
    kind = ClockFailureKind.SHIFT_NOT_FOUND

    def __init__(self, shift_id: str):
        super().__init__(f"Shift {shift_id!r} not found")
        self.shift_id = shift_id

    def details(self) -> dict:
        return {"shift_id": self.shift_id}


class OutsideTimeWindowError(ClockActionError):
    kind = ClockFailureKind.OUTSIDE_TIME_WINDOW

    def __init__(self, *, action: str, window_start: datetime, window_end: datetime):
        super().__init__(
            f"{action} is only allowed from {window_start:%H:%M} to {window_end:%H:%M}"
        )
        self.action = action
        self.window_start = window_start
        self.window_end = window_end

    def details(self) -> dict:
        return {
            "window_start": self.window_start.strftime("%H:%M"),
            "window_end": self.window_end.strftime("%H:%M"),
        }


class StoreLocationMissingError(ClockActionError):
    kind = ClockFailureKind.STORE_LOCATION_MISSING

    def __init__(self, store_name: str | None = None):
        super().__init__(f"Store {store_name or 'unknown'!r} has no location")
        self.store_name = store_name

    def details(self) -> dict:
        return {"store_name": self.store_name}


class LocationUnavailableError(ClockActionError):
    kind = ClockFailureKind.LOCATION_UNAVAILABLE

    def __init__(self, reason: str = "Unable to get current position"):
        super().__init__(reason)


class OutsideGeofenceError(ClockActionError):
    kind = ClockFailureKind.OUTSIDE_GEOFENCE

    def __init__(self, *, distance_m: int, radius_m: float):
        super().__init__(f"Outside store range ({distance_m}m)")
        self.distance_m = distance_m
        self.radius_m = radius_m

    def details(self) -> dict:
        return {"distance_m": self.distance_m, "radius_m": self.radius_m}


class AlreadyClockedInError(ClockActionError):
    kind = ClockFailureKind.ALREADY_CLOCKED_IN

    def __init__(self, attendance_id: int):
        super().__init__("Already clocked in")
        self.attendance_id = attendance_id

    def details(self) -> dict:
        return {"attendance_id": self.attendance_id}
