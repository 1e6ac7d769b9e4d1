from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import ActivityState, BreakKind


@dataclass(frozen=True)
class WorkEntry:
    """Thực thể miền (domain): một khoảng làm việc cho một task của một phòng ban."""

    entry_id: int
    employee_id: int
    department_id: int
    task_id: int
    start_time: datetime
    end_time: Optional[datetime]
    duration_minutes: Optional[int]
    shift_id: Optional[int]
    entry_date: date

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class BreakEntry:
    """Thực thể miền (domain): một lần nghỉ (có lương / không lương)."""

    entry_id: int
    employee_id: int
    break_kind: BreakKind
    start_time: datetime
    end_time: Optional[datetime]
    duration_minutes: Optional[int]
    entry_date: date

    @property
    def is_open(self) -> bool:
        return self.end_time is None


Entry = Union[WorkEntry, BreakEntry]


@dataclass(frozen=True)
class CurrentState:
    state: ActivityState
    entry: Optional[Entry] = None


@dataclass(frozen=True)
class DailyTotals:
    work_minutes: int = 0
    paid_break_minutes: int = 0
    unpaid_break_minutes: int = 0

    @property
    def break_minutes(self) -> int:
        return self.paid_break_minutes + self.unpaid_break_minutes


@dataclass(frozen=True)
class DailyActivity:
    """Read-model for the tracker screen: today's entries plus totals."""

    entry_date: date
    work_entries: list[WorkEntry]
    break_entries: list[BreakEntry]
    totals: DailyTotals


@dataclass(frozen=True)
class WorkEntryReportRow:
    """Read-model phục vụ báo cáo tổng hợp theo phòng ban."""

    entry_id: int
    employee_id: int
    employee_name: str
    department_id: int
    department_name: str
    task_id: int
    task_name: str
    entry_date: date
    duration_minutes: int
