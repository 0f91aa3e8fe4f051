from datetime import datetime, time

import pytest

from store_timeclock.core.enums import ClockAction, ClockFailureKind, LiveState
from store_timeclock.core.exceptions import (
    AlreadyClockedInError,
    AuthenticationError,
    ClockActionError,
    LocationUnavailableError,
    OutsideGeofenceError,
    ValidationError,
)
from store_timeclock.schedules.model import ScheduleEntry
from store_timeclock.shifts.model import Shift


def _service(container):
    return container.attendance_service


def test_verify_pin(container, repos):
    svc = _service(container)

    assert svc.verify_pin(repos.employee_id, "1111").name == "Dieu"
    with pytest.raises(AuthenticationError):
        svc.verify_pin(repos.employee_id, "9999")
    with pytest.raises(ValidationError):
        svc.verify_pin(999, "1111")


def test_full_day_alternates_in_then_out(container, repos, clock, at_store):
    svc = _service(container)

    first = svc.record_action(repos.employee_id, at_store)
    assert first.action == ClockAction.CLOCK_IN
    assert first.record.is_open
    assert first.deviation_hours is None
    assert first.distance_m == 0
    assert at_store.calls == [10.0]

    clock.set(datetime(2026, 3, 2, 17, 10))
    second = svc.record_action(repos.employee_id, at_store)
    assert second.action == ClockAction.CLOCK_OUT
    assert second.record.attendance_id == first.record.attendance_id
    assert second.record.clock_out == datetime(2026, 3, 2, 17, 10)
    assert second.record.worked_hours == pytest.approx(9 + 15 / 60)

    stored = repos.attendance.get_by_id(first.record.attendance_id)
    assert stored.clock_out == datetime(2026, 3, 2, 17, 10)
    assert repos.attendance.find_open_for_employee(repos.employee_id) is None


def test_late_clock_in_records_late_hours(container, repos, at_store):
    repos.shifts.save(
        Shift(
            shift_id="FT",
            name="Full-time",
            short_name="08:00-17:00",
            start_time=time(8, 0),
            end_time=time(17, 0),
            clock_in_before=30,
            clock_in_after=20,
        )
    )

    result = _service(container).clock_in(repos.employee_id, at_store, now=datetime(2026, 3, 2, 8, 15))

    assert result.deviation_hours == pytest.approx(0.25)
    assert repos.attendance.get_by_id(result.record.attendance_id).late_hours == pytest.approx(0.25)


def test_early_clock_out_records_early_leave(container, repos, at_store):
    svc = _service(container)
    svc.clock_in(repos.employee_id, at_store)

    result = svc.clock_out(repos.employee_id, at_store, now=datetime(2026, 3, 2, 16, 54))

    assert result.deviation_hours == pytest.approx(0.1)
    assert result.record.early_leave_hours == pytest.approx(0.1)


def test_no_schedule_is_checked_first(container, repos, failing_position):
    with pytest.raises(ClockActionError) as exc:
        _service(container).record_action(repos.employee_id, failing_position, now=datetime(2026, 3, 3, 8, 0))

    assert exc.value.kind == ClockFailureKind.NO_SCHEDULE_TODAY
    assert failing_position.calls == 0
    assert repos.attendance.records == {}


def test_missing_shift(container, repos, failing_position):
    repos.schedules.upsert(
        ScheduleEntry(employee_id=repos.employee_id, work_date=repos.WORK_DAY, shift_id="GONE", store_id=repos.store_id)
    )

    with pytest.raises(ClockActionError) as exc:
        _service(container).record_action(repos.employee_id, failing_position)

    assert exc.value.kind == ClockFailureKind.SHIFT_NOT_FOUND
    assert failing_position.calls == 0


def test_window_is_checked_before_location(container, repos, failing_position):
    with pytest.raises(ClockActionError) as exc:
        _service(container).record_action(repos.employee_id, failing_position, now=datetime(2026, 3, 2, 7, 0))

    assert exc.value.kind == ClockFailureKind.OUTSIDE_TIME_WINDOW
    assert "07:30" in str(exc.value) and "08:10" in str(exc.value)
    assert failing_position.calls == 0


def test_store_without_location(container, repos, failing_position):
    repos.schedules.upsert(
        ScheduleEntry(employee_id=repos.employee_id, work_date=repos.WORK_DAY, shift_id="FT", store_id=repos.empty_store_id)
    )

    with pytest.raises(ClockActionError) as exc:
        _service(container).record_action(repos.employee_id, failing_position)

    assert exc.value.kind == ClockFailureKind.STORE_LOCATION_MISSING
    assert failing_position.calls == 0


def test_location_unavailable(container, repos, failing_position):
    with pytest.raises(LocationUnavailableError):
        _service(container).record_action(repos.employee_id, failing_position)

    assert failing_position.calls == 1
    assert repos.attendance.records == {}


def test_location_timeout_maps_to_unavailable(container, repos, timeout_position):
    with pytest.raises(LocationUnavailableError, match="timed out"):
        _service(container).record_action(repos.employee_id, timeout_position)


def test_outside_geofence_reports_distance(container, repos, far_position):
    with pytest.raises(OutsideGeofenceError) as exc:
        _service(container).record_action(repos.employee_id, far_position)

    assert 1100 <= exc.value.distance_m <= 1125
    assert f"({exc.value.distance_m}m)" in str(exc.value)
    assert repos.attendance.records == {}


def test_redundant_clock_in_rejected(container, repos, at_store):
    svc = _service(container)
    first = svc.clock_in(repos.employee_id, at_store)

    with pytest.raises(AlreadyClockedInError) as exc:
        svc.clock_in(repos.employee_id, at_store)

    assert exc.value.attendance_id == first.record.attendance_id
    assert len(repos.attendance.records) == 1


def test_clock_out_without_open_record_changes_nothing(container, repos, at_store):
    result = _service(container).clock_out(repos.employee_id, at_store, now=datetime(2026, 3, 2, 17, 0))

    assert result.action == ClockAction.CLOCK_OUT
    assert result.record is None
    assert repos.attendance.records == {}


def test_correct_record_sets_edited_flags(container, repos, at_store):
    svc = _service(container)
    rec = svc.clock_in(repos.employee_id, at_store).record

    fixed = svc.correct_record(
        rec.attendance_id,
        clock_in=rec.clock_in,
        clock_out=datetime(2026, 3, 2, 17, 0),
    )

    assert fixed.clock_in_edited is False
    assert fixed.clock_out_edited is True
    assert repos.attendance.get_by_id(rec.attendance_id).clock_out == datetime(2026, 3, 2, 17, 0)


def test_correct_record_rejects_inverted_times(container, repos, at_store):
    svc = _service(container)
    rec = svc.clock_in(repos.employee_id, at_store).record

    with pytest.raises(ValidationError):
        svc.correct_record(rec.attendance_id, clock_in=rec.clock_in, clock_out=datetime(2026, 3, 2, 7, 0))


def test_live_status_and_recent_activity(container, repos, clock, at_store):
    other = repos.employees.create(name="Lan", pin="2222")
    svc = _service(container)
    svc.record_action(repos.employee_id, at_store)

    rows = {r.employee_id: r for r in svc.live_status()}
    assert rows[repos.employee_id].state == LiveState.WORKING
    assert rows[repos.employee_id].store_name == "Kho"
    assert rows[other].state == LiveState.NOT_CLOCKED_IN

    clock.set(datetime(2026, 3, 2, 17, 5))
    svc.record_action(repos.employee_id, at_store)

    rows = {r.employee_id: r for r in svc.live_status()}
    assert rows[repos.employee_id].state == LiveState.CLOCKED_OUT

    events = svc.recent_activity()
    assert [e.action for e in events] == [ClockAction.CLOCK_OUT]
    assert events[0].at == datetime(2026, 3, 2, 17, 5)


def test_clock_out_when_record_closed_concurrently(container, repos, at_store, monkeypatch):
    svc = _service(container)
    opened = svc.clock_in(repos.employee_id, at_store).record
    monkeypatch.setattr(repos.attendance, "close", lambda **kwargs: False)

    result = svc.clock_out(repos.employee_id, at_store, now=datetime(2026, 3, 2, 17, 0))

    assert result.action == ClockAction.CLOCK_OUT
    assert result.record is None
    assert repos.attendance.get_by_id(opened.attendance_id).is_open


def test_geofence_decision_goes_through_radius_check(container, repos, at_store, monkeypatch):
    calls = []

    def outside(position, store, radius_meters):
        calls.append((store.store_id, radius_meters))
        return False

    monkeypatch.setattr("store_timeclock.attendance.service.is_within_radius", outside)

    with pytest.raises(OutsideGeofenceError):
        _service(container).record_action(repos.employee_id, at_store)

    assert calls == [(repos.store_id, 500.0)]
    assert repos.attendance.records == {}
