from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import ClockStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.clock import Clock, SystemClock
from .core.constants import DEFAULT_GEOFENCE_RADIUS_METERS, DEFAULT_POSITION_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payroll.service import PayrollReportService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .stores.mysql_store_repository import MySQLStoreRepository
from .stores.repository import StoreRepository
from .stores.service import StoreService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    stores_repo: StoreRepository
    shifts_repo: ShiftRepository
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository

    attendance_service: AttendanceService
    employee_service: EmployeeService
    store_service: StoreService
    shift_service: ShiftService
    schedule_service: ScheduleService
    payroll_report_service: PayrollReportService

    clock: Clock
    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    stores_repo: StoreRepository,
    shifts_repo: ShiftRepository,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    clock: Optional[Clock] = None,
    radius_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS,
    position_timeout_seconds: float = DEFAULT_POSITION_TIMEOUT_SECONDS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    clock = clock or SystemClock()

    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        shifts_repo,
        schedules_repo,
        stores_repo,
        clock=clock,
        strategy_factory=ClockStrategyFactory(),
        radius_meters=radius_meters,
        position_timeout_seconds=position_timeout_seconds,
    )
    employee_service = EmployeeService(employees_repo, attendance_repo, schedules_repo)
    store_service = StoreService(stores_repo)
    shift_service = ShiftService(shifts_repo, schedules_repo)
    schedule_service = ScheduleService(schedules_repo, employees_repo, shifts_repo, stores_repo)
    payroll_report_service = PayrollReportService(attendance_repo, schedules_repo, shifts_repo, employees_repo)

    return Container(
        employees_repo=employees_repo,
        stores_repo=stores_repo,
        shifts_repo=shifts_repo,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        employee_service=employee_service,
        store_service=store_service,
        shift_service=shift_service,
        schedule_service=schedule_service,
        payroll_report_service=payroll_report_service,
        clock=clock,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    radius_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS,
    position_timeout_seconds: float = DEFAULT_POSITION_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        stores_repo=MySQLStoreRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        radius_meters=radius_meters,
        position_timeout_seconds=position_timeout_seconds,
        conn=conn,
    )
