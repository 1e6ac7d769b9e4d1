from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import Optional

from ..common.clock import Clock
from ..common.validators import require_break_kind, require_positive_id
from ..core.enums import BreakKind
from ..core.exceptions import InvalidIntervalError, NotFoundError, ValidationError
from .duration import elapsed_minutes
from .locks import EmployeeLocks
from .model import BreakEntry, WorkEntry
from .repository import BreakEntryRepository, WorkEntryRepository

logger = logging.getLogger(__name__)


class TimeCardAdjustmentService:
    """Use case: admin corrections of time cards and breaks.

    The duration and the entry date are always recomputed from the corrected
    times, and the shift resolved at clock-in is never changed.
    """

    def __init__(
        self,
        work_entries: WorkEntryRepository,
        break_entries: BreakEntryRepository,
        locks: EmployeeLocks,
        clock: Clock,
    ):
        self._work_entries = work_entries
        self._break_entries = break_entries
        self._locks = locks
        self._clock = clock

    @staticmethod
    def _duration_for(start_time: datetime, end_time: Optional[datetime]) -> Optional[int]:
        if end_time is None:
            return None
        if end_time <= start_time:
            raise InvalidIntervalError(start_time, end_time)
        return elapsed_minutes(start_time, end_time)

    def _require_can_reopen(self, entry) -> None:
        """Reopening must not leave two open entries for the employee."""

        open_work = self._work_entries.find_open(entry.employee_id)
        open_break = self._break_entries.find_open(entry.employee_id)
        if open_work is not None or open_break is not None:
            raise ValidationError("Employee already has an entry in progress")

    @staticmethod
    def _load(repo, entry_id: int, missing_message: str):
        entry = repo.get_by_id(entry_id)
        if entry is None:
            raise NotFoundError(missing_message)
        return entry

    def adjust_work_entry(self, entry_id: int, *, start_time: datetime, end_time: Optional[datetime]) -> WorkEntry:
        entry_id = require_positive_id(entry_id, "Entry")
        employee_id = self._load(self._work_entries, entry_id, "Time entry not found").employee_id
        duration = self._duration_for(start_time, end_time)
        entry_date = self._clock.local_date(start_time)

        with self._locks.hold(employee_id):
            # The employee may have clocked in or out since the first read.
            entry = self._load(self._work_entries, entry_id, "Time entry not found")
            if end_time is None and not entry.is_open:
                self._require_can_reopen(entry)

            updated = self._work_entries.update_times(
                entry_id=entry_id,
                start_time=start_time,
                end_time=end_time,
                duration_minutes=duration,
                entry_date=entry_date,
            )
            if not updated:
                raise NotFoundError("Time entry not found")

        logger.info("Adjusted work entry %s of employee %s (%s min)", entry_id, employee_id, duration)
        return dataclasses.replace(
            entry,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration,
            entry_date=entry_date,
        )

    def adjust_break_entry(
        self,
        entry_id: int,
        *,
        start_time: datetime,
        end_time: Optional[datetime],
        break_kind: Optional[BreakKind | str] = None,
    ) -> BreakEntry:
        entry_id = require_positive_id(entry_id, "Entry")
        employee_id = self._load(self._break_entries, entry_id, "Break entry not found").employee_id
        kind = require_break_kind(break_kind) if break_kind is not None else None
        duration = self._duration_for(start_time, end_time)
        entry_date = self._clock.local_date(start_time)

        with self._locks.hold(employee_id):
            entry = self._load(self._break_entries, entry_id, "Break entry not found")
            kind = kind or entry.break_kind
            if end_time is None and not entry.is_open:
                self._require_can_reopen(entry)

            updated = self._break_entries.update_times(
                entry_id=entry_id,
                start_time=start_time,
                end_time=end_time,
                duration_minutes=duration,
                entry_date=entry_date,
                break_kind=kind,
            )
            if not updated:
                raise NotFoundError("Break entry not found")

        logger.info("Adjusted break entry %s of employee %s (%s min)", entry_id, employee_id, duration)
        return dataclasses.replace(
            entry,
            break_kind=kind,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration,
            entry_date=entry_date,
        )

    def delete_work_entry(self, entry_id: int) -> None:
        if not self._work_entries.delete(require_positive_id(entry_id, "Entry")):
            raise NotFoundError("Time entry not found")
        logger.info("Deleted work entry %s", entry_id)

    def delete_break_entry(self, entry_id: int) -> None:
        if not self._break_entries.delete(require_positive_id(entry_id, "Entry")):
            raise NotFoundError("Break entry not found")
        logger.info("Deleted break entry %s", entry_id)
