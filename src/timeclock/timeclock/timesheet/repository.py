from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import BreakKind
from .model import BreakEntry, WorkEntry, WorkEntryReportRow


class WorkEntryRepository(Protocol):
    """Storage port for work entries.

    Note (DIP): managers depend on this interface only; the engine never
    builds ad-hoc queries.
    """

    def find_open(self, employee_id: int) -> Optional[WorkEntry]:
        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[WorkEntry]:
        raise NotImplementedError

    def insert(
        self,
        *,
        employee_id: int,
        department_id: int,
        task_id: int,
        start_time: datetime,
        shift_id: Optional[int],
        entry_date: date,
    ) -> WorkEntry:
        raise NotImplementedError

    def close(self, *, entry_id: int, end_time: datetime, duration_minutes: int) -> bool:
        """Close an open entry. Returns False when it was already closed."""

        raise NotImplementedError

    def list_for_employee_and_date(self, employee_id: int, entry_date: date) -> Sequence[WorkEntry]:
        raise NotImplementedError

    def update_times(
        self,
        *,
        entry_id: int,
        start_time: datetime,
        end_time: Optional[datetime],
        duration_minutes: Optional[int],
        entry_date: date,
    ) -> bool:
        """Admin correction; the resolved shift is left untouched.

        Returns False when the entry no longer exists.
        """

        raise NotImplementedError

    def delete(self, entry_id: int) -> bool:
        raise NotImplementedError

    def list_closed_report_rows(self, entry_date: date) -> Sequence[WorkEntryReportRow]:
        raise NotImplementedError


class BreakEntryRepository(Protocol):
    def find_open(self, employee_id: int) -> Optional[BreakEntry]:
        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[BreakEntry]:
        raise NotImplementedError

    def insert(
        self,
        *,
        employee_id: int,
        break_kind: BreakKind,
        start_time: datetime,
        entry_date: date,
    ) -> BreakEntry:
        raise NotImplementedError

    def close(self, *, entry_id: int, end_time: datetime, duration_minutes: int) -> bool:
        raise NotImplementedError

    def list_for_employee_and_date(self, employee_id: int, entry_date: date) -> Sequence[BreakEntry]:
        raise NotImplementedError

    def update_times(
        self,
        *,
        entry_id: int,
        start_time: datetime,
        end_time: Optional[datetime],
        duration_minutes: Optional[int],
        entry_date: date,
        break_kind: BreakKind,
    ) -> bool:
        raise NotImplementedError

    def delete(self, entry_id: int) -> bool:
        raise NotImplementedError
