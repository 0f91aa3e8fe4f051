from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, clock_in, clock_out,
    late_hours, early_leave_hours, clock_in_edited, clock_out_edited
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        late_hours=optional_float(r.get("late_hours")),
        early_leave_hours=optional_float(r.get("early_leave_hours")),
        clock_in_edited=bool(r.get("clock_in_edited")),
        clock_out_edited=bool(r.get("clock_out_edited")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def find_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND clock_out IS NULL
                ORDER BY clock_in DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_between(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["clock_in >= %s", "clock_in < %s"]
        params: list[object] = [datetime.combine(start, datetime.min.time()), datetime.combine(end + timedelta(days=1), datetime.min.time())]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY clock_in ASC, attendance_id ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                ORDER BY COALESCE(clock_out, clock_in) DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def latest_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY clock_in DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_clock_in(
        self,
        *,
        employee_id: int,
        clock_in: datetime,
        late_hours: Optional[float] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, clock_in, late_hours)
                VALUES(%s,%s,%s)
                """,
                (int(employee_id), clock_in, late_hours),
            )
            return int(cur.lastrowid)

    def close(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        early_leave_hours: Optional[float] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_out=%s, early_leave_hours=%s
                WHERE attendance_id=%s AND clock_out IS NULL
                """,
                (clock_out, early_leave_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        clock_in: datetime,
        clock_out: Optional[datetime],
        clock_in_edited: bool,
        clock_out_edited: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_in=%s, clock_out=%s, clock_in_edited=%s, clock_out_edited=%s
                WHERE attendance_id=%s
                """,
                (clock_in, clock_out, int(clock_in_edited), int(clock_out_edited), int(attendance_id)),
            )
            cur.execute("SELECT 1 AS ok FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return fetchone(cur) is not None

    def delete_for_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE employee_id=%s", (int(employee_id),))
            return int(cur.rowcount)
