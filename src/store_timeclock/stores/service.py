from __future__ import annotations

from ..common.validators import require_coordinates, require_non_empty
from ..core.exceptions import ValidationError
from .model import StoreLocation
from .repository import StoreRepository


class StoreService:
    def __init__(self, stores: StoreRepository):
        self._stores = stores

    def list_stores(self):
        return list(self._stores.list_all())

    def update_store(self, *, store_id: int, name: str, latitude, longitude) -> StoreLocation:
        name = require_non_empty(name, "Store name")
        lat, lon = require_coordinates(latitude, longitude)

        if not self._stores.get_by_id(int(store_id)):
            raise ValidationError("Store not found")
        if not self._stores.update(store_id=int(store_id), name=name, latitude=lat, longitude=lon):
            raise ValidationError("Updating store failed")
        return StoreLocation(store_id=int(store_id), name=name, latitude=lat, longitude=lon)

    def create_store(self, *, name: str, latitude=0.0, longitude=0.0) -> StoreLocation:
        """New stores may start at (0, 0), i.e. without a location."""
        name = require_non_empty(name, "Store name")
        lat, lon = require_coordinates(latitude, longitude)
        store_id = self._stores.create(name=name, latitude=lat, longitude=lon)
        return StoreLocation(store_id=store_id, name=name, latitude=lat, longitude=lon)
