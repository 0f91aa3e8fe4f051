from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _row_to_employee(r: dict) -> Employee:
    return Employee(employee_id=int(r["employee_id"]), name=r["name"], pin=str(r["pin"]))


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id, name, pin FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id, name, pin FROM employees ORDER BY employee_id")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def create(self, *, name: str, pin: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO employees(name, pin) VALUES(%s,%s)", (name, pin))
            return int(cur.lastrowid)

    def update(self, *, employee_id: int, name: str, pin: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET name=%s, pin=%s WHERE employee_id=%s", (name, pin, int(employee_id)))
            # MySQL reports 0 affected rows when nothing changed
            cur.execute("SELECT 1 AS ok FROM employees WHERE employee_id=%s", (int(employee_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
