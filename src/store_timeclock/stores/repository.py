from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import StoreLocation


class StoreRepository(Protocol):
    def list_all(self) -> Sequence[StoreLocation]:
        raise NotImplementedError

    def get_by_id(self, store_id: int) -> Optional[StoreLocation]:
        raise NotImplementedError

    def update(self, *, store_id: int, name: str, latitude: float, longitude: float) -> bool:
        raise NotImplementedError

    def create(self, *, name: str, latitude: float, longitude: float) -> int:
        raise NotImplementedError
