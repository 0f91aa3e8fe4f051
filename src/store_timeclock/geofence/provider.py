from __future__ import annotations

from typing import Optional, Protocol

from ..core.exceptions import PositionUnavailableError
from .evaluator import Coordinates


class PositionProvider(Protocol):
    """Single-shot device position request.

    Implementations either return a fix within ``timeout_seconds`` or raise
    ``PositionUnavailableError`` / ``TimeoutError``. No retries here; the caller
    decides whether to ask again.
    """

    def get_position(self, *, timeout_seconds: float) -> Coordinates:
        raise NotImplementedError


class ReportedPositionProvider:
    """Position reported by the kiosk client together with the clock request.

    The browser resolves geolocation (with its own timeout) before posting, so
    this provider only relays the coordinates or the device error it got.
    """

    def __init__(
        self,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        *,
        error: Optional[str] = None,
    ):
        self._latitude = latitude
        self._longitude = longitude
        self._error = error

    @classmethod
    def from_payload(cls, payload: dict) -> "ReportedPositionProvider":
        error = payload.get("location_error") or None
        try:
            lat = float(payload["latitude"]) if payload.get("latitude") is not None else None
            lon = float(payload["longitude"]) if payload.get("longitude") is not None else None
        except (TypeError, ValueError):
            return cls(error="Invalid coordinates")
        return cls(lat, lon, error=error)

    def get_position(self, *, timeout_seconds: float) -> Coordinates:
        if self._error:
            raise PositionUnavailableError(str(self._error))
        if self._latitude is None or self._longitude is None:
            raise PositionUnavailableError("No position reported")
        return Coordinates(latitude=self._latitude, longitude=self._longitude)
