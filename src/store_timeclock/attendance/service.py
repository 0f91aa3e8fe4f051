from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.clock import Clock, SystemClock
from ..core.constants import (
    DEFAULT_ACTIVITY_LIMIT,
    DEFAULT_GEOFENCE_RADIUS_METERS,
    DEFAULT_POSITION_TIMEOUT_SECONDS,
)
from ..core.enums import ClockAction, LiveState
from ..core.exceptions import (
    AlreadyClockedInError,
    AuthenticationError,
    ClockActionError,
    LocationUnavailableError,
    NoScheduleTodayError,
    OutsideGeofenceError,
    PositionUnavailableError,
    ShiftNotFoundError,
    StoreLocationMissingError,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..geofence.evaluator import distance_to_store, is_within_radius
from ..geofence.provider import PositionProvider
from ..schedules.repository import ScheduleRepository
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from ..stores.model import StoreLocation
from ..stores.repository import StoreRepository
from .factory import ClockStrategyFactory
from .model import ActivityEvent, AttendanceRecord, ClockResult, LiveStatusRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: clock in/out at a store kiosk, plus the admin views built on records.

    Callers must serialize clock actions per employee; the repository's
    open-record lookup right before the write is the only arbitration.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        shifts: ShiftRepository,
        schedules: ScheduleRepository,
        stores: StoreRepository,
        *,
        clock: Clock | None = None,
        strategy_factory: ClockStrategyFactory | None = None,
        radius_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS,
        position_timeout_seconds: float = DEFAULT_POSITION_TIMEOUT_SECONDS,
    ):
        self._attendance = attendance
        self._employees = employees
        self._shifts = shifts
        self._schedules = schedules
        self._stores = stores
        self._clock = clock or SystemClock()
        self._factory = strategy_factory or ClockStrategyFactory()
        self._radius_meters = float(radius_meters)
        self._position_timeout = float(position_timeout_seconds)

    def verify_pin(self, employee_id: int, pin: str) -> Employee:
        employee = self._require_employee(employee_id)
        if employee.pin != pin:
            raise AuthenticationError("Wrong PIN")
        return employee

    def record_action(
        self,
        employee_id: int,
        position_provider: PositionProvider,
        *,
        now: datetime | None = None,
    ) -> ClockResult:
        """Clock in or out depending on the stored open-record state."""
        now = now or self._clock.now()
        employee = self._require_employee(employee_id)

        open_record = self._attendance.find_open_for_employee(employee.employee_id)
        action = ClockAction.CLOCK_OUT if open_record else ClockAction.CLOCK_IN
        return self._perform(employee, action, position_provider, now=now, open_record=open_record)

    def clock_in(
        self,
        employee_id: int,
        position_provider: PositionProvider,
        *,
        now: datetime | None = None,
    ) -> ClockResult:
        now = now or self._clock.now()
        employee = self._require_employee(employee_id)

        open_record = self._attendance.find_open_for_employee(employee.employee_id)
        if open_record:
            logger.warning("Clock-in rejected for employee %s: record %s still open", employee.employee_id, open_record.attendance_id)
            raise AlreadyClockedInError(open_record.attendance_id)
        return self._perform(employee, ClockAction.CLOCK_IN, position_provider, now=now)

    def clock_out(
        self,
        employee_id: int,
        position_provider: PositionProvider,
        *,
        now: datetime | None = None,
    ) -> ClockResult:
        now = now or self._clock.now()
        employee = self._require_employee(employee_id)

        open_record = self._attendance.find_open_for_employee(employee.employee_id)
        return self._perform(employee, ClockAction.CLOCK_OUT, position_provider, now=now, open_record=open_record)

    def _perform(
        self,
        employee: Employee,
        action: ClockAction,
        position_provider: PositionProvider,
        *,
        now: datetime,
        open_record: Optional[AttendanceRecord] = None,
    ) -> ClockResult:
        try:
            shift, store = self._resolve_assignment(employee.employee_id, now=now)

            strategy = self._factory.for_action(action)
            strategy.check_window(shift=shift, now=now)

            if store is None or not store.has_location:
                raise StoreLocationMissingError(store.name if store else None)

            try:
                position = position_provider.get_position(timeout_seconds=self._position_timeout)
            except (PositionUnavailableError, TimeoutError) as exc:
                raise LocationUnavailableError(str(exc) or "Unable to get current position") from exc

            distance = distance_to_store(position, store)
            if not is_within_radius(position, store, self._radius_meters):
                raise OutsideGeofenceError(distance_m=round(distance), radius_m=self._radius_meters)
        except ClockActionError as exc:
            logger.warning("%s rejected for employee %s: %s (%s)", action.value, employee.employee_id, exc.kind.value, exc)
            raise

        deviation = strategy.deviation_hours(shift=shift, now=now)
        if action == ClockAction.CLOCK_IN:
            record = self._open_record(employee, now=now, late_hours=deviation)
        else:
            record = self._close_record(employee, open_record, now=now, early_leave_hours=deviation)

        return ClockResult(action=action, record=record, deviation_hours=deviation, distance_m=round(distance))

    def _resolve_assignment(self, employee_id: int, *, now: datetime) -> tuple[Shift, Optional[StoreLocation]]:
        entry = self._schedules.get_for_employee_and_date(employee_id=employee_id, work_date=now.date())
        if not entry:
            raise NoScheduleTodayError()

        shift = self._shifts.get_by_id(entry.shift_id)
        if not shift:
            raise ShiftNotFoundError(entry.shift_id)

        return shift, self._stores.get_by_id(entry.store_id)

    def _open_record(self, employee: Employee, *, now: datetime, late_hours: Optional[float]) -> AttendanceRecord:
        attendance_id = self._attendance.create_clock_in(
            employee_id=employee.employee_id,
            clock_in=now,
            late_hours=late_hours,
        )
        logger.info("Clocked IN - %s (late=%s)", employee.name, f"{late_hours:.2f}h" if late_hours else "no")
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee.employee_id,
            clock_in=now,
            late_hours=late_hours,
        )

    def _close_record(
        self,
        employee: Employee,
        open_record: Optional[AttendanceRecord],
        *,
        now: datetime,
        early_leave_hours: Optional[float],
    ) -> Optional[AttendanceRecord]:
        if open_record is None:
            logger.warning("Clock-out for employee %s ignored: no open record", employee.employee_id)
            return None

        if not self._attendance.close(
            attendance_id=open_record.attendance_id,
            clock_out=now,
            early_leave_hours=early_leave_hours,
        ):
            logger.warning(
                "Clock-out for employee %s ignored: record %s was already closed",
                employee.employee_id,
                open_record.attendance_id,
            )
            return None
        logger.info(
            "Clocked OUT - %s (early=%s)",
            employee.name,
            f"{early_leave_hours:.2f}h" if early_leave_hours else "no",
        )
        return AttendanceRecord(
            attendance_id=open_record.attendance_id,
            employee_id=open_record.employee_id,
            clock_in=open_record.clock_in,
            clock_out=now,
            late_hours=open_record.late_hours,
            early_leave_hours=early_leave_hours,
            clock_in_edited=open_record.clock_in_edited,
            clock_out_edited=open_record.clock_out_edited,
        )

    def correct_record(
        self,
        attendance_id: int,
        *,
        clock_in: datetime,
        clock_out: Optional[datetime],
    ) -> AttendanceRecord:
        """Admin correction of a record's timestamps."""
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise ValidationError("Attendance record not found")
        if clock_out is not None and clock_out < clock_in:
            raise ValidationError("Clock-out must not be before clock-in")
        if clock_out is None and not record.is_open:
            other = self._attendance.find_open_for_employee(record.employee_id)
            if other and other.attendance_id != record.attendance_id:
                raise ValidationError("Employee already has an open record")

        clock_in_edited = record.clock_in_edited or clock_in != record.clock_in
        clock_out_edited = record.clock_out_edited or clock_out != record.clock_out

        if not self._attendance.admin_update_record(
            attendance_id=record.attendance_id,
            clock_in=clock_in,
            clock_out=clock_out,
            clock_in_edited=clock_in_edited,
            clock_out_edited=clock_out_edited,
        ):
            raise ValidationError("Updating attendance record failed")

        return AttendanceRecord(
            attendance_id=record.attendance_id,
            employee_id=record.employee_id,
            clock_in=clock_in,
            clock_out=clock_out,
            late_hours=record.late_hours,
            early_leave_hours=record.early_leave_hours,
            clock_in_edited=clock_in_edited,
            clock_out_edited=clock_out_edited,
        )

    def live_status(self) -> list[LiveStatusRow]:
        rows: list[LiveStatusRow] = []
        for employee in self._employees.list_all():
            last = self._attendance.latest_for_employee(employee.employee_id)
            if last is None:
                rows.append(LiveStatusRow(employee.employee_id, employee.name, LiveState.NOT_CLOCKED_IN, None, "-"))
            elif last.is_open:
                rows.append(
                    LiveStatusRow(
                        employee.employee_id,
                        employee.name,
                        LiveState.WORKING,
                        last.clock_in,
                        self._store_name_on(employee.employee_id, last.clock_in),
                    )
                )
            else:
                rows.append(LiveStatusRow(employee.employee_id, employee.name, LiveState.CLOCKED_OUT, last.clock_out, "-"))
        return rows

    def _store_name_on(self, employee_id: int, moment: datetime) -> str:
        entry = self._schedules.get_for_employee_and_date(employee_id=employee_id, work_date=moment.date())
        if not entry:
            return "-"
        store = self._stores.get_by_id(entry.store_id)
        return store.name if store else "Unknown"

    def recent_activity(self, *, limit: int = DEFAULT_ACTIVITY_LIMIT) -> list[ActivityEvent]:
        names = {e.employee_id: e.name for e in self._employees.list_all()}
        events: list[ActivityEvent] = []
        for r in self._attendance.list_recent(limit):
            name = names.get(r.employee_id)
            if name is None:
                continue
            if r.clock_out:
                events.append(ActivityEvent(r.attendance_id, r.employee_id, name, ClockAction.CLOCK_OUT, r.clock_out))
            else:
                events.append(ActivityEvent(r.attendance_id, r.employee_id, name, ClockAction.CLOCK_IN, r.clock_in))
        return events

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise ValidationError("Employee not found")
        return employee
