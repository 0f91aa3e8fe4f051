from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from store_timeclock.attendance.model import AttendanceRecord
from store_timeclock.common.clock import FixedClock
from store_timeclock.container import wire_container
from store_timeclock.core.exceptions import PositionUnavailableError
from store_timeclock.employees.model import Employee
from store_timeclock.geofence.evaluator import Coordinates
from store_timeclock.schedules.model import ScheduleEntry
from store_timeclock.shifts.model import Shift
from store_timeclock.stores.model import StoreLocation

STORE_LAT = 21.030
STORE_LON = 105.800


class InMemoryEmployees:
    def __init__(self):
        self._by_id: dict[int, Employee] = {}
        self._id = 0

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_all(self):
        return [self._by_id[k] for k in sorted(self._by_id)]

    def create(self, *, name: str, pin: str) -> int:
        self._id += 1
        self._by_id[self._id] = Employee(employee_id=self._id, name=name, pin=pin)
        return self._id

    def update(self, *, employee_id: int, name: str, pin: str) -> bool:
        if employee_id not in self._by_id:
            return False
        self._by_id[employee_id] = Employee(employee_id=employee_id, name=name, pin=pin)
        return True

    def delete_by_id(self, employee_id: int) -> bool:
        return self._by_id.pop(employee_id, None) is not None


class InMemoryStores:
    def __init__(self):
        self._by_id: dict[int, StoreLocation] = {}
        self._id = 0

    def list_all(self):
        return [self._by_id[k] for k in sorted(self._by_id)]

    def get_by_id(self, store_id: int) -> Optional[StoreLocation]:
        return self._by_id.get(store_id)

    def create(self, *, name: str, latitude: float, longitude: float) -> int:
        self._id += 1
        self._by_id[self._id] = StoreLocation(store_id=self._id, name=name, latitude=latitude, longitude=longitude)
        return self._id

    def update(self, *, store_id: int, name: str, latitude: float, longitude: float) -> bool:
        if store_id not in self._by_id:
            return False
        self._by_id[store_id] = StoreLocation(store_id=store_id, name=name, latitude=latitude, longitude=longitude)
        return True


class InMemoryShifts:
    def __init__(self):
        self.shifts: dict[str, Shift] = {}

    def list_all(self):
        return sorted(self.shifts.values(), key=lambda s: (s.start_time, s.shift_id))

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        return self.shifts.get(shift_id)

    def save(self, shift: Shift) -> None:
        self.shifts[shift.shift_id] = shift

    def delete(self, shift_id: str) -> bool:
        return self.shifts.pop(shift_id, None) is not None


class InMemorySchedules:
    def __init__(self):
        self.entries: dict[tuple[int, date], ScheduleEntry] = {}

    def get_for_employee_and_date(self, *, employee_id: int, work_date: date) -> Optional[ScheduleEntry]:
        return self.entries.get((employee_id, work_date))

    def upsert(self, entry: ScheduleEntry) -> None:
        self.entries[(entry.employee_id, entry.work_date)] = entry

    def delete_for_employee_and_date(self, *, employee_id: int, work_date: date) -> bool:
        return self.entries.pop((employee_id, work_date), None) is not None

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None):
        out = [
            e
            for e in self.entries.values()
            if start <= e.work_date <= end and (employee_id is None or e.employee_id == employee_id)
        ]
        return sorted(out, key=lambda e: (e.work_date, e.employee_id))

    def delete_for_employee(self, employee_id: int) -> int:
        keys = [k for k, e in self.entries.items() if e.employee_id == employee_id]
        for k in keys:
            del self.entries[k]
        return len(keys)

    def delete_for_shift(self, shift_id: str) -> int:
        keys = [k for k, e in self.entries.items() if e.shift_id == shift_id]
        for k in keys:
            del self.entries[k]
        return len(keys)


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self._id = 0

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self._id = max(self._id, record.attendance_id)
        self.records[record.attendance_id] = record
        return record

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self.records.get(attendance_id)

    def find_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        for r in self.records.values():
            if r.employee_id == employee_id and r.clock_out is None:
                return r
        return None

    def list_between(self, *, start: date, end: date, employee_id: Optional[int] = None):
        out = [
            r
            for r in self.records.values()
            if start <= r.clock_in.date() <= end and (employee_id is None or r.employee_id == employee_id)
        ]
        return sorted(out, key=lambda r: (r.clock_in, r.attendance_id))

    def list_recent(self, limit: int):
        out = sorted(self.records.values(), key=lambda r: r.clock_out or r.clock_in, reverse=True)
        return out[:limit]

    def latest_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        mine = [r for r in self.records.values() if r.employee_id == employee_id]
        return max(mine, key=lambda r: r.clock_in) if mine else None

    def create_clock_in(self, *, employee_id: int, clock_in: datetime, late_hours=None) -> int:
        self._id += 1
        self.records[self._id] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            clock_in=clock_in,
            late_hours=late_hours,
        )
        return self._id

    def close(self, *, attendance_id: int, clock_out: datetime, early_leave_hours=None) -> bool:
        r = self.records.get(attendance_id)
        if not r or r.clock_out is not None:
            return False
        self.records[attendance_id] = replace(r, clock_out=clock_out, early_leave_hours=early_leave_hours)
        return True

    def admin_update_record(self, *, attendance_id, clock_in, clock_out, clock_in_edited, clock_out_edited) -> bool:
        r = self.records.get(attendance_id)
        if not r:
            return False
        self.records[attendance_id] = replace(
            r,
            clock_in=clock_in,
            clock_out=clock_out,
            clock_in_edited=clock_in_edited,
            clock_out_edited=clock_out_edited,
        )
        return True

    def delete_for_employee(self, employee_id: int) -> int:
        keys = [k for k, r in self.records.items() if r.employee_id == employee_id]
        for k in keys:
            del self.records[k]
        return len(keys)


class FixedPosition:
    def __init__(self, latitude: float, longitude: float):
        self.coords = Coordinates(latitude, longitude)
        self.calls: list[float] = []

    def get_position(self, *, timeout_seconds: float) -> Coordinates:
        self.calls.append(timeout_seconds)
        return self.coords


class FailingPosition:
    def __init__(self, exc: Exception):
        self.exc = exc
        self.calls = 0

    def get_position(self, *, timeout_seconds: float) -> Coordinates:
        self.calls += 1
        raise self.exc


class Repos:
    """All five collections plus a small seeded world.

    Employee 1 (PIN 1111) works shift FT (08:00-17:00, in -30/+10, out -10/+30)
    at store 1 on Monday 2026-03-02.
    """

    WORK_DAY = date(2026, 3, 2)

    def __init__(self):
        self.employees = InMemoryEmployees()
        self.stores = InMemoryStores()
        self.shifts = InMemoryShifts()
        self.schedules = InMemorySchedules()
        self.attendance = InMemoryAttendance()

        self.employee_id = self.employees.create(name="Dieu", pin="1111")
        self.store_id = self.stores.create(name="Kho", latitude=STORE_LAT, longitude=STORE_LON)
        self.empty_store_id = self.stores.create(name="Unassigned", latitude=0.0, longitude=0.0)
        self.shifts.save(
            Shift(
                shift_id="FT",
                name="Full-time",
                short_name="08:00-17:00",
                start_time=time(8, 0),
                end_time=time(17, 0),
                clock_in_before=30,
                clock_in_after=10,
                clock_out_before=10,
                clock_out_after=30,
            )
        )
        self.schedules.upsert(
            ScheduleEntry(employee_id=self.employee_id, work_date=self.WORK_DAY, shift_id="FT", store_id=self.store_id)
        )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 7, 55, 0)


@pytest.fixture
def repos() -> Repos:
    return Repos()


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def container(repos, clock):
    return wire_container(
        employees_repo=repos.employees,
        stores_repo=repos.stores,
        shifts_repo=repos.shifts,
        schedules_repo=repos.schedules,
        attendance_repo=repos.attendance,
        clock=clock,
        radius_meters=500,
        position_timeout_seconds=10,
    )


@pytest.fixture
def at_store() -> FixedPosition:
    return FixedPosition(STORE_LAT, STORE_LON)


@pytest.fixture
def failing_position():
    return FailingPosition(PositionUnavailableError("permission denied"))


@pytest.fixture
def far_position() -> FixedPosition:
    # about 1112 m north of the store
    return FixedPosition(STORE_LAT + 0.01, STORE_LON)


@pytest.fixture
def timeout_position():
    return FailingPosition(TimeoutError("timed out"))
