from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import EARTH_RADIUS_METERS
from ..stores.model import StoreLocation


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in meters (haversine)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def distance_to_store(position: Coordinates, store: StoreLocation) -> float:
    return distance_meters(position.latitude, position.longitude, store.latitude, store.longitude)


def is_within_radius(position: Coordinates, store: StoreLocation, radius_meters: float) -> bool:
    """Fails closed: a store without a location never matches."""
    if not store.has_location:
        return False
    return distance_to_store(position, store) <= radius_meters
