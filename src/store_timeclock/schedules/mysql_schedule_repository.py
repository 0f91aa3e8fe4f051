from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ScheduleEntry
from .repository import ScheduleRepository


def _row_to_entry(r: dict) -> ScheduleEntry:
    return ScheduleEntry(
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        shift_id=str(r["shift_id"]),
        store_id=int(r["store_id"]),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, *, employee_id: int, work_date: date) -> Optional[ScheduleEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, work_date, shift_id, store_id
                FROM schedule_entries
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def upsert(self, entry: ScheduleEntry) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedule_entries(employee_id, work_date, shift_id, store_id)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE shift_id=VALUES(shift_id), store_id=VALUES(store_id)
                """,
                (entry.employee_id, entry.work_date, entry.shift_id, entry.store_id),
            )

    def delete_for_employee_and_date(self, *, employee_id: int, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM schedule_entries WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            return cur.rowcount > 0

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[ScheduleEntry]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, work_date, shift_id, store_id
                FROM schedule_entries
                WHERE {where}
                ORDER BY work_date ASC, employee_id ASC
                """,
                tuple(params),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def delete_for_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedule_entries WHERE employee_id=%s", (int(employee_id),))
            return int(cur.rowcount)

    def delete_for_shift(self, shift_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedule_entries WHERE shift_id=%s", (shift_id,))
            return int(cur.rowcount)
