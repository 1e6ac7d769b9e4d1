from __future__ import annotations

import dataclasses
import threading
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import pytest

from src.timeclock.timeclock.container import wire_services
from src.timeclock.timeclock.core.enums import BreakKind
from src.timeclock.timeclock.core.exceptions import StorageError
from src.timeclock.timeclock.departments.model import Department, Task
from src.timeclock.timeclock.employees.model import Employee
from src.timeclock.timeclock.shifts.model import Shift
from src.timeclock.timeclock.timesheet.model import BreakEntry, WorkEntry, WorkEntryReportRow


class FixedClock:
    """Clock frozen at ``current`` until a test moves it."""

    def __init__(self, current: datetime, tz=timezone.utc):
        self.current = current
        self.tz = tz

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current

    def to_local(self, instant: datetime) -> datetime:
        return instant.astimezone(self.tz)

    def local_date(self, instant: datetime) -> date:
        return self.to_local(instant).date()


class SteppingClock(FixedClock):
    """Every read moves time forward; used where many threads clock in."""

    def __init__(self, current: datetime, step=timedelta(seconds=1), tz=timezone.utc):
        super().__init__(current, tz)
        self._step = step
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            self.current = self.current + self._step
            return self.current


class _InMemoryEntries:
    def __init__(self):
        self._lock = threading.Lock()
        self._rows: dict[int, object] = {}
        self._id = 0

    def _next_id(self) -> int:
        self._id += 1
        return self._id

    def all(self):
        with self._lock:
            return list(self._rows.values())

    def find_open(self, employee_id: int):
        with self._lock:
            for r in self._rows.values():
                if r.employee_id == employee_id and r.end_time is None:
                    return r
            return None

    def get_by_id(self, entry_id: int):
        return self._rows.get(int(entry_id))

    def close(self, *, entry_id: int, end_time: datetime, duration_minutes: int) -> bool:
        with self._lock:
            r = self._rows.get(entry_id)
            if r is None or r.end_time is not None:
                return False
            self._rows[entry_id] = dataclasses.replace(r, end_time=end_time, duration_minutes=duration_minutes)
            return True

    def list_for_employee_and_date(self, employee_id: int, entry_date: date):
        with self._lock:
            return [r for r in self._rows.values() if r.employee_id == employee_id and r.entry_date == entry_date]

    def delete(self, entry_id: int) -> bool:
        with self._lock:
            return self._rows.pop(int(entry_id), None) is not None


class InMemoryWorkEntries(_InMemoryEntries):
    def __init__(self, names: Optional[dict] = None):
        super().__init__()
        self._names = names or {}
        self.fail_inserts = False

    def insert(self, *, employee_id, department_id, task_id, start_time, shift_id, entry_date) -> WorkEntry:
        if self.fail_inserts:
            raise StorageError("insert failed")
        with self._lock:
            entry = WorkEntry(
                entry_id=self._next_id(),
                employee_id=employee_id,
                department_id=department_id,
                task_id=task_id,
                start_time=start_time,
                end_time=None,
                duration_minutes=None,
                shift_id=shift_id,
                entry_date=entry_date,
            )
            self._rows[entry.entry_id] = entry
            return entry

    def update_times(self, *, entry_id, start_time, end_time, duration_minutes, entry_date) -> bool:
        with self._lock:
            r = self._rows.get(entry_id)
            if r is None:
                return False
            self._rows[entry_id] = dataclasses.replace(
                r, start_time=start_time, end_time=end_time, duration_minutes=duration_minutes, entry_date=entry_date
            )
            return True

    def list_closed_report_rows(self, entry_date: date):
        rows = []
        for r in sorted(self.all(), key=lambda e: e.start_time):
            if r.entry_date != entry_date or r.end_time is None:
                continue
            rows.append(
                WorkEntryReportRow(
                    entry_id=r.entry_id,
                    employee_id=r.employee_id,
                    employee_name=self._names.get(("employee", r.employee_id), f"E{r.employee_id}"),
                    department_id=r.department_id,
                    department_name=self._names.get(("department", r.department_id), f"D{r.department_id}"),
                    task_id=r.task_id,
                    task_name=self._names.get(("task", r.task_id), f"T{r.task_id}"),
                    entry_date=r.entry_date,
                    duration_minutes=r.duration_minutes or 0,
                )
            )
        return rows


class InMemoryBreakEntries(_InMemoryEntries):
    def insert(self, *, employee_id, break_kind, start_time, entry_date) -> BreakEntry:
        with self._lock:
            entry = BreakEntry(
                entry_id=self._next_id(),
                employee_id=employee_id,
                break_kind=break_kind,
                start_time=start_time,
                end_time=None,
                duration_minutes=None,
                entry_date=entry_date,
            )
            self._rows[entry.entry_id] = entry
            return entry

    def update_times(self, *, entry_id, start_time, end_time, duration_minutes, entry_date, break_kind) -> bool:
        with self._lock:
            r = self._rows.get(entry_id)
            if r is None:
                return False
            self._rows[entry_id] = dataclasses.replace(
                r,
                start_time=start_time,
                end_time=end_time,
                duration_minutes=duration_minutes,
                entry_date=entry_date,
                break_kind=break_kind,
            )
            return True


class InMemoryShifts:
    def __init__(self, shifts):
        self.shifts = list(shifts)

    def list_all(self):
        return list(self.shifts)

    def get_by_id(self, shift_id: int):
        return next((s for s in self.shifts if s.shift_id == shift_id), None)


class InMemoryDepartments:
    def __init__(self, departments, tasks):
        self._departments = list(departments)
        self._tasks = {t.task_id: t for t in tasks}

    def list_all(self):
        return list(self._departments)

    def list_tasks(self, department_id: int):
        return [t for t in self._tasks.values() if t.department_id == department_id]

    def get_task(self, task_id: int):
        return self._tasks.get(task_id)


class InMemoryEmployees:
    def __init__(self, employees=()):
        self.by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self.pin_hashes: dict[int, str] = {}

    def get_by_id(self, employee_id: int):
        return self.by_id.get(employee_id)

    def get_by_name(self, name: str):
        return next((e for e in self.by_id.values() if e.name == name), None)

    def get_by_code(self, employee_code: str):
        return next((e for e in self.by_id.values() if e.employee_code == employee_code), None)

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda e: e.name)

    def create(self, *, name, employee_code, is_temp, position) -> int:
        employee_id = max(self.by_id, default=0) + 1
        self.by_id[employee_id] = Employee(
            employee_id=employee_id, name=name, employee_code=employee_code, is_temp=is_temp, position=position
        )
        return employee_id

    def set_pin(self, employee_id, *, pin_hash, pin_set_at) -> bool:
        self.pin_hashes[employee_id] = pin_hash
        self.by_id[employee_id] = dataclasses.replace(self.by_id[employee_id], pin_set_at=pin_set_at)
        return True

    def clear_pin(self, employee_id) -> bool:
        self.pin_hashes.pop(employee_id, None)
        self.by_id[employee_id] = dataclasses.replace(self.by_id[employee_id], pin_set_at=None)
        return True


MORNING = Shift(shift_id=1, shift_name="Morning", start_time=time(6, 0), end_time=time(14, 0))
EVENING = Shift(shift_id=2, shift_name="Evening", start_time=time(14, 0), end_time=time(22, 0))
NIGHT = Shift(shift_id=3, shift_name="Night", start_time=time(22, 0), end_time=time(6, 0))


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def make_clock():
    def _make(current: datetime, *, tz=timezone.utc, stepping: bool = False):
        return SteppingClock(current, tz=tz) if stepping else FixedClock(current, tz=tz)

    return _make


@pytest.fixture
def shifts_repo() -> InMemoryShifts:
    return InMemoryShifts([MORNING, EVENING, NIGHT])


@pytest.fixture
def departments_repo() -> InMemoryDepartments:
    return InMemoryDepartments(
        [Department(department_id=1, name="Production"), Department(department_id=2, name="Warehouse")],
        [
            Task(task_id=10, department_id=1, name="Assembly"),
            Task(task_id=11, department_id=1, name="Quality check"),
            Task(task_id=20, department_id=2, name="Picking"),
        ],
    )


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(employee_id=1, name="Jane Doe", employee_code="EMP_jane_doe_1001"),
            Employee(employee_id=2, name="John Roe", employee_code="EMP_john_roe_1002", is_temp=True),
        ]
    )


@pytest.fixture
def work_repo() -> InMemoryWorkEntries:
    return InMemoryWorkEntries(
        {
            ("employee", 1): "Jane Doe",
            ("employee", 2): "John Roe",
            ("department", 1): "Production",
            ("department", 2): "Warehouse",
            ("task", 10): "Assembly",
            ("task", 11): "Quality check",
            ("task", 20): "Picking",
        }
    )


@pytest.fixture
def break_repo() -> InMemoryBreakEntries:
    return InMemoryBreakEntries()


@pytest.fixture
def build(employees_repo, departments_repo, shifts_repo, work_repo, break_repo):
    """Wire services over the in-memory repositories for a given clock."""

    def _build(clock, *, break_limits=None):
        return wire_services(
            clock=clock,
            employees_repo=employees_repo,
            departments_repo=departments_repo,
            shifts_repo=shifts_repo,
            work_entries_repo=work_repo,
            break_entries_repo=break_repo,
            break_limits=break_limits,
        )

    return _build


@pytest.fixture
def container(build, clock):
    return build(clock, break_limits={BreakKind.PAID: 15, BreakKind.UNPAID: 30})


@pytest.fixture
def service(container):
    return container.time_accounting_service
