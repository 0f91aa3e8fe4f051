from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import StoreLocation
from .repository import StoreRepository


def _row_to_store(r: dict) -> StoreLocation:
    return StoreLocation(
        store_id=int(r["store_id"]),
        name=r["name"],
        latitude=float(r["latitude"] or 0),
        longitude=float(r["longitude"] or 0),
    )


class MySQLStoreRepository(StoreRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[StoreLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT store_id, name, latitude, longitude FROM stores ORDER BY store_id")
            return [_row_to_store(r) for r in fetchall(cur)]

    def get_by_id(self, store_id: int) -> Optional[StoreLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT store_id, name, latitude, longitude FROM stores WHERE store_id=%s", (int(store_id),))
            r = fetchone(cur)
            return _row_to_store(r) if r else None

    def update(self, *, store_id: int, name: str, latitude: float, longitude: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE stores SET name=%s, latitude=%s, longitude=%s WHERE store_id=%s",
                (name, float(latitude), float(longitude), int(store_id)),
            )
            cur.execute("SELECT 1 AS ok FROM stores WHERE store_id=%s", (int(store_id),))
            return fetchone(cur) is not None

    def create(self, *, name: str, latitude: float, longitude: float) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO stores(name, latitude, longitude) VALUES(%s,%s,%s)",
                (name, float(latitude), float(longitude)),
            )
            return int(cur.lastrowid)
