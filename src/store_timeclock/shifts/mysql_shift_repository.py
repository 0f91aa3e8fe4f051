from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_wall_clock, db_cursor, fetchall, fetchone, optional_int
from .model import Shift
from .repository import ShiftRepository

_COLUMNS = """
    shift_id, name, short_name, start_time, end_time, color,
    clock_in_before, clock_in_after, clock_out_before, clock_out_after
"""


def _row_to_shift(r: dict) -> Shift:
    return Shift(
        shift_id=str(r["shift_id"]),
        name=r["name"],
        short_name=r["short_name"],
        start_time=as_wall_clock(r["start_time"]),
        end_time=as_wall_clock(r["end_time"]),
        color=r.get("color") or "",
        clock_in_before=optional_int(r.get("clock_in_before")),
        clock_in_after=optional_int(r.get("clock_in_after")),
        clock_out_before=optional_int(r.get("clock_out_before")),
        clock_out_after=optional_int(r.get("clock_out_after")),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts ORDER BY start_time, shift_id")
            return [_row_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (shift_id,))
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def save(self, shift: Shift) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(
                    shift_id, name, short_name, start_time, end_time, color,
                    clock_in_before, clock_in_after, clock_out_before, clock_out_after
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), short_name=VALUES(short_name),
                    start_time=VALUES(start_time), end_time=VALUES(end_time), color=VALUES(color),
                    clock_in_before=VALUES(clock_in_before), clock_in_after=VALUES(clock_in_after),
                    clock_out_before=VALUES(clock_out_before), clock_out_after=VALUES(clock_out_after)
                """,
                (
                    shift.shift_id,
                    shift.name,
                    shift.short_name,
                    shift.start_time,
                    shift.end_time,
                    shift.color,
                    shift.clock_in_before,
                    shift.clock_in_after,
                    shift.clock_out_before,
                    shift.clock_out_after,
                ),
            )

    def delete(self, shift_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (shift_id,))
            return cur.rowcount > 0
