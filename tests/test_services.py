from datetime import date, datetime

import pytest

from store_timeclock.attendance.model import AttendanceRecord
from store_timeclock.core.exceptions import ValidationError
from store_timeclock.schedules.model import ScheduleEntry


@pytest.mark.parametrize("pin", ["123", "12345", "12a4", "", " 1234", "1234\n", "١٢٣٤"])
def test_create_employee_rejects_bad_pin(container, pin):
    with pytest.raises(ValidationError):
        container.employee_service.create_employee(name="Lan", pin=pin)


def test_create_and_update_employee(container, repos):
    created = container.employee_service.create_employee(name="  Lan ", pin="0420")
    assert created.name == "Lan"

    updated = container.employee_service.update_employee(employee_id=created.employee_id, name="Lan B", pin="0421")
    assert repos.employees.get_by_id(created.employee_id) == updated


def test_delete_employee_cascades(container, repos):
    emp = repos.employee_id
    repos.attendance.add(AttendanceRecord(attendance_id=1, employee_id=emp, clock_in=datetime(2026, 3, 2, 8, 0)))
    other = repos.employees.create(name="Lan", pin="2222")
    repos.schedules.upsert(ScheduleEntry(employee_id=other, work_date=repos.WORK_DAY, shift_id="FT", store_id=repos.store_id))

    container.employee_service.delete_employee(employee_id=emp)

    assert repos.employees.get_by_id(emp) is None
    assert repos.attendance.records == {}
    assert list(repos.schedules.entries) == [(other, repos.WORK_DAY)]


def test_delete_employee_retry_after_failed_cascade(container, repos, monkeypatch):
    emp = repos.employee_id
    repos.attendance.add(AttendanceRecord(attendance_id=1, employee_id=emp, clock_in=datetime(2026, 3, 2, 8, 0)))
    real_delete = repos.attendance.delete_for_employee

    def broken_delete(employee_id):
        raise ConnectionError("lost connection to MySQL server")

    monkeypatch.setattr(repos.attendance, "delete_for_employee", broken_delete)
    with pytest.raises(ConnectionError):
        container.employee_service.delete_employee(employee_id=emp)

    assert repos.employees.get_by_id(emp) is not None
    assert len(repos.attendance.records) == 1

    monkeypatch.setattr(repos.attendance, "delete_for_employee", real_delete)
    container.employee_service.delete_employee(employee_id=emp)

    assert repos.employees.get_by_id(emp) is None
    assert repos.attendance.records == {}
    assert repos.schedules.entries == {}


def test_delete_unknown_employee(container):
    with pytest.raises(ValidationError):
        container.employee_service.delete_employee(employee_id=404)


def test_save_shift_defaults_and_grace(container, repos):
    shift = container.shift_service.save_shift(
        {"name": "Evening", "start_time": "17:00", "end_time": "22:00", "clock_in_before": "15", "clock_out_after": ""}
    )

    assert shift.short_name == "Evening"
    assert shift.clock_in_before == 15
    assert shift.clock_out_after is None
    assert shift.clock_out_after_minutes == 0
    assert repos.shifts.get_by_id(shift.shift_id) == shift


@pytest.mark.parametrize(
    "data",
    [
        {"name": "", "start_time": "08:00", "end_time": "17:00"},
        {"name": "X", "start_time": "8am", "end_time": "17:00"},
        {"name": "X", "start_time": "08:00", "end_time": "17:00", "clock_in_after": -5},
        {"name": "X", "start_time": "08:00", "end_time": "17:00", "clock_in_after": "ten"},
    ],
)
def test_save_shift_validation(container, data):
    with pytest.raises(ValidationError):
        container.shift_service.save_shift(data)


def test_delete_shift_cascades_to_schedule(container, repos):
    container.shift_service.delete_shift(shift_id="FT")

    assert repos.shifts.get_by_id("FT") is None
    assert repos.schedules.entries == {}


def test_delete_shift_keeps_shift_when_cascade_fails(container, repos, monkeypatch):
    def broken_delete(shift_id):
        raise ConnectionError("lost connection to MySQL server")

    monkeypatch.setattr(repos.schedules, "delete_for_shift", broken_delete)
    with pytest.raises(ConnectionError):
        container.shift_service.delete_shift(shift_id="FT")

    assert repos.shifts.get_by_id("FT") is not None


def test_delete_unknown_shift(container):
    with pytest.raises(ValidationError):
        container.shift_service.delete_shift(shift_id="NOPE")


def test_assign_upserts_single_entry(container, repos):
    svc = container.schedule_service
    day = date(2026, 3, 4)

    svc.assign(employee_id=repos.employee_id, work_date=day, shift_id="FT", store_id=repos.store_id)
    svc.assign(employee_id=repos.employee_id, work_date=day, shift_id="FT", store_id=repos.empty_store_id)

    entries = svc.list_range(start=day, end=day)
    assert len(entries) == 1
    assert entries[0].store_id == repos.empty_store_id


def test_assign_none_clears_day(container, repos):
    container.schedule_service.assign(employee_id=repos.employee_id, work_date=repos.WORK_DAY, shift_id=None)

    assert repos.schedules.get_for_employee_and_date(employee_id=repos.employee_id, work_date=repos.WORK_DAY) is None


def test_assign_validates_references(container, repos):
    svc = container.schedule_service

    with pytest.raises(ValidationError):
        svc.assign(employee_id=repos.employee_id, work_date=repos.WORK_DAY, shift_id="NOPE", store_id=repos.store_id)
    with pytest.raises(ValidationError):
        svc.assign(employee_id=repos.employee_id, work_date=repos.WORK_DAY, shift_id="FT", store_id=None)
    with pytest.raises(ValidationError):
        svc.assign(employee_id=404, work_date=repos.WORK_DAY, shift_id="FT", store_id=repos.store_id)


def test_week_for_employee(container, repos):
    week = container.schedule_service.week_for_employee(employee_id=repos.employee_id, today=date(2026, 3, 4))

    assert len(week) == 7
    assert week[0].work_date == date(2026, 3, 2)
    assert week[0].weekday == "Monday"
    assert week[0].shift_short_name == "08:00-17:00"
    assert week[0].store_name == "Kho"
    assert week[1].shift_short_name is None
    assert [w.is_today for w in week].index(True) == 2


def test_store_create_defaults_to_no_location(container):
    store = container.store_service.create_store(name="New")

    assert store.has_location is False


def test_store_update_validates_coordinates(container, repos):
    with pytest.raises(ValidationError):
        container.store_service.update_store(store_id=repos.store_id, name="Kho", latitude=91, longitude=0)

    moved = container.store_service.update_store(store_id=repos.store_id, name="Kho", latitude="21.5", longitude=105.9)
    assert repos.stores.get_by_id(repos.store_id) == moved
