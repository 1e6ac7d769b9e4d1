from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.clock import Clock
from ..common.validators import require_break_kind, require_positive_id
from ..core.enums import ActivityState, BreakKind
from ..core.exceptions import ValidationError
from ..departments.repository import DepartmentRepository
from .break_manager import BreakManager
from .duration import elapsed_minutes
from .locks import EmployeeLocks
from .model import BreakEntry, CurrentState, DailyActivity, DailyTotals, WorkEntry
from .repository import BreakEntryRepository, WorkEntryRepository
from .session_manager import SessionManager

logger = logging.getLogger(__name__)


class TimeAccountingService:
    """Entry point for clocking commands and queries.

    Every command takes "now" from the clock and runs under the employee's
    lock, so the close-then-open sequence of one employee is never
    interleaved with another command for the same employee.
    """

    def __init__(
        self,
        work_entries: WorkEntryRepository,
        break_entries: BreakEntryRepository,
        sessions: SessionManager,
        breaks: BreakManager,
        clock: Clock,
        *,
        departments: Optional[DepartmentRepository] = None,
        locks: Optional[EmployeeLocks] = None,
    ):
        self._work_entries = work_entries
        self._break_entries = break_entries
        self._sessions = sessions
        self._breaks = breaks
        self._clock = clock
        self._departments = departments
        self._locks = locks or EmployeeLocks()

    @property
    def clock(self) -> Clock:
        return self._clock

    def break_limit(self, kind: BreakKind) -> int:
        return self._breaks.limit_for(kind)

    # Commands

    def start_task(self, employee_id: int, department_id: int, task_id: int) -> WorkEntry:
        employee_id = require_positive_id(employee_id, "Employee")
        department_id = require_positive_id(department_id, "Department")
        task_id = require_positive_id(task_id, "Task")
        self._require_task_in_department(department_id, task_id)

        with self._locks.hold(employee_id):
            return self._sessions.start_task(employee_id, department_id, task_id, self._clock.now())

    def end_task(self, employee_id: int) -> Optional[WorkEntry]:
        employee_id = require_positive_id(employee_id, "Employee")
        with self._locks.hold(employee_id):
            return self._sessions.end_task(employee_id, self._clock.now())

    def start_break(self, employee_id: int, kind: BreakKind | str) -> BreakEntry:
        employee_id = require_positive_id(employee_id, "Employee")
        kind = require_break_kind(kind)
        with self._locks.hold(employee_id):
            return self._breaks.start_break(employee_id, kind, self._clock.now())

    def end_break(self, employee_id: int, *, confirm_over_limit: bool = False) -> Optional[BreakEntry]:
        employee_id = require_positive_id(employee_id, "Employee")
        with self._locks.hold(employee_id):
            return self._breaks.end_break(employee_id, self._clock.now(), confirm_over_limit=confirm_over_limit)

    # Queries

    def current_state(self, employee_id: int) -> CurrentState:
        employee_id = require_positive_id(employee_id, "Employee")

        work = self._work_entries.find_open(employee_id)
        if work is not None:
            return CurrentState(state=ActivityState.WORKING, entry=work)

        brk = self._break_entries.find_open(employee_id)
        if brk is not None:
            return CurrentState(state=ActivityState.ON_BREAK, entry=brk)

        return CurrentState(state=ActivityState.IDLE)

    def daily_totals(self, employee_id: int, on_date: date) -> DailyTotals:
        employee_id = require_positive_id(employee_id, "Employee")
        work = self._work_entries.list_for_employee_and_date(employee_id, on_date)
        breaks = self._break_entries.list_for_employee_and_date(employee_id, on_date)
        return self._totals(work, breaks)

    def todays_activity(self, employee_id: int) -> DailyActivity:
        employee_id = require_positive_id(employee_id, "Employee")
        today = self._clock.local_date(self._clock.now())

        work = sorted(self._work_entries.list_for_employee_and_date(employee_id, today), key=lambda e: e.start_time)
        breaks = sorted(self._break_entries.list_for_employee_and_date(employee_id, today), key=lambda e: e.start_time)
        return DailyActivity(entry_date=today, work_entries=work, break_entries=breaks, totals=self._totals(work, breaks))

    # Helpers

    def _booked_minutes(self, entry, now) -> int:
        if entry.end_time is not None:
            return int(entry.duration_minutes or 0)
        # Open entries count their live duration.
        return max(elapsed_minutes(entry.start_time, now=now), 0)

    def _totals(self, work, breaks) -> DailyTotals:
        now = self._clock.now()
        paid = unpaid = 0
        for b in breaks:
            if b.break_kind == BreakKind.PAID:
                paid += self._booked_minutes(b, now)
            else:
                unpaid += self._booked_minutes(b, now)

        return DailyTotals(
            work_minutes=sum(self._booked_minutes(w, now) for w in work),
            paid_break_minutes=paid,
            unpaid_break_minutes=unpaid,
        )

    def _require_task_in_department(self, department_id: int, task_id: int) -> None:
        if self._departments is None:
            return
        task = self._departments.get_task(task_id)
        if task is None or task.department_id != department_id:
            raise ValidationError("Task does not belong to the selected department")
