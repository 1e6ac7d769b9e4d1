from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.clock import Clock
from ..shifts.repository import ShiftRepository
from ..shifts.resolver import resolve_shift
from .manager_base import EntryManager
from .model import WorkEntry
from .repository import WorkEntryRepository

logger = logging.getLogger(__name__)


class SessionManager(EntryManager[WorkEntry]):
    """Work entry state machine: IDLE <-> WORKING."""

    kind_label = "work entry"

    def __init__(self, entries: WorkEntryRepository, shifts: ShiftRepository, clock: Clock):
        super().__init__(entries)
        self._shifts = shifts
        self._clock = clock

    def start_task(self, employee_id: int, department_id: int, task_id: int, now: datetime) -> WorkEntry:
        shift = resolve_shift(self._clock.to_local(now), self._shifts.list_all())

        self.close_before_open(employee_id, now)

        entry = self._entries.insert(
            employee_id=employee_id,
            department_id=department_id,
            task_id=task_id,
            start_time=now,
            shift_id=shift.shift_id if shift else None,
            entry_date=self._clock.local_date(now),
        )
        logger.info(
            "Employee %s started task %s/%s (entry %s, shift %s)",
            employee_id,
            department_id,
            task_id,
            entry.entry_id,
            shift.shift_name if shift else "-",
        )
        return entry

    def end_task(self, employee_id: int, now: datetime) -> Optional[WorkEntry]:
        entry = self.find_open(employee_id)
        if entry is None:
            logger.info("Employee %s has no open work entry to end", employee_id)
            return None
        return self.close_entry(entry, now)
