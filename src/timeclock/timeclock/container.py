from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional
from zoneinfo import ZoneInfo

from .common.clock import Clock, SystemClock
from .core.constants import DEFAULT_TIMEZONE
from .core.enums import BreakKind
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.repository import DepartmentRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .reports.service import DepartmentSummaryService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .timesheet.adjustment import TimeCardAdjustmentService
from .timesheet.break_manager import BreakManager
from .timesheet.locks import EmployeeLocks
from .timesheet.mysql_timesheet_repository import MySQLBreakEntryRepository, MySQLWorkEntryRepository
from .timesheet.repository import BreakEntryRepository, WorkEntryRepository
from .timesheet.service import TimeAccountingService
from .timesheet.session_manager import SessionManager


@dataclass(frozen=True)
class Container:
    clock: Clock

    employees_repo: EmployeeRepository
    departments_repo: DepartmentRepository
    shifts_repo: ShiftRepository
    work_entries_repo: WorkEntryRepository
    break_entries_repo: BreakEntryRepository

    time_accounting_service: TimeAccountingService
    adjustment_service: TimeCardAdjustmentService
    employee_service: EmployeeService
    department_summary_service: DepartmentSummaryService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    clock: Clock,
    employees_repo: EmployeeRepository,
    departments_repo: DepartmentRepository,
    shifts_repo: ShiftRepository,
    work_entries_repo: WorkEntryRepository,
    break_entries_repo: BreakEntryRepository,
    break_limits: Optional[Mapping[BreakKind, int]] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services over any repository backend."""

    locks = EmployeeLocks()
    sessions = SessionManager(work_entries_repo, shifts_repo, clock)
    breaks = BreakManager(break_entries_repo, sessions, clock, limits=break_limits)

    time_accounting_service = TimeAccountingService(
        work_entries_repo,
        break_entries_repo,
        sessions,
        breaks,
        clock,
        departments=departments_repo,
        locks=locks,
    )

    return Container(
        clock=clock,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        shifts_repo=shifts_repo,
        work_entries_repo=work_entries_repo,
        break_entries_repo=break_entries_repo,
        time_accounting_service=time_accounting_service,
        adjustment_service=TimeCardAdjustmentService(work_entries_repo, break_entries_repo, locks, clock),
        employee_service=EmployeeService(employees_repo, clock),
        department_summary_service=DepartmentSummaryService(work_entries_repo),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    timezone_name: str = DEFAULT_TIMEZONE,
    break_limits: Optional[Mapping[BreakKind, int]] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        clock=SystemClock(ZoneInfo(timezone_name)),
        employees_repo=MySQLEmployeeRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        work_entries_repo=MySQLWorkEntryRepository(conn),
        break_entries_repo=MySQLBreakEntryRepository(conn),
        break_limits=break_limits,
        conn=conn,
    )
