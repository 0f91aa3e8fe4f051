from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import NO_LOCATION


@dataclass(frozen=True)
class StoreLocation:
    """Thực thể miền (domain): Cửa hàng và toạ độ của nó."""

    store_id: int
    name: str
    latitude: float
    longitude: float

    @property
    def has_location(self) -> bool:
        # (0, 0) means "no location assigned"
        return (self.latitude, self.longitude) != NO_LOCATION
