from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_PIN_RE = re.compile(r"[0-9]{4}")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_pin(value: str) -> str:
    if not isinstance(value, str) or not _PIN_RE.fullmatch(value):
        raise ValidationError("PIN must be exactly 4 digits")
    return value


def optional_grace_minutes(value, field_name: str) -> Optional[int]:
    """Grace minutes stay None when absent; present values must be non-negative ints."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number of minutes")
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number of minutes") from None
    if minutes != value and str(minutes) != str(value).strip():
        raise ValidationError(f"{field_name} must be a whole number of minutes")
    if minutes < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return minutes


def require_coordinates(latitude, longitude) -> tuple[float, float]:
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise ValidationError("Latitude/longitude must be numbers") from None
    if not -90.0 <= lat <= 90.0:
        raise ValidationError("Latitude must be between -90 and 90")
    if not -180.0 <= lon <= 180.0:
        raise ValidationError("Longitude must be between -180 and 180")
    return lat, lon
