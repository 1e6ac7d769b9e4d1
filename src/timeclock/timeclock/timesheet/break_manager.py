from __future__ import annotations

import logging
from datetime import datetime
from typing import Mapping, Optional

from ..common.clock import Clock
from ..core.constants import DEFAULT_PAID_BREAK_LIMIT_MINUTES, DEFAULT_UNPAID_BREAK_LIMIT_MINUTES
from ..core.enums import BreakKind
from ..core.exceptions import BreakOverLimitError
from .duration import elapsed_minutes
from .manager_base import EntryManager
from .model import BreakEntry
from .repository import BreakEntryRepository
from .session_manager import SessionManager

logger = logging.getLogger(__name__)

DEFAULT_BREAK_LIMITS = {
    BreakKind.PAID: DEFAULT_PAID_BREAK_LIMIT_MINUTES,
    BreakKind.UNPAID: DEFAULT_UNPAID_BREAK_LIMIT_MINUTES,
}


class BreakManager(EntryManager[BreakEntry]):
    """Break entry state machine: NOT_ON_BREAK <-> ON_BREAK(kind).

    Starting a break closes the open work entry through ``sessions`` and
    starting a task closes the open break.
    """

    kind_label = "break"

    def __init__(
        self,
        entries: BreakEntryRepository,
        sessions: SessionManager,
        clock: Clock,
        *,
        limits: Optional[Mapping[BreakKind, int]] = None,
    ):
        super().__init__(entries)
        self._clock = clock
        self._limits = dict(DEFAULT_BREAK_LIMITS)
        self._limits.update(limits or {})
        self.exclusive_with(sessions)

    def limit_for(self, kind: BreakKind) -> int:
        return int(self._limits[BreakKind(kind)])

    def start_break(self, employee_id: int, kind: BreakKind, now: datetime) -> BreakEntry:
        kind = BreakKind(kind)
        self.close_before_open(employee_id, now)

        entry = self._entries.insert(
            employee_id=employee_id,
            break_kind=kind,
            start_time=now,
            entry_date=self._clock.local_date(now),
        )
        logger.info("Employee %s started %s break (entry %s)", employee_id, kind.value, entry.entry_id)
        return entry

    def end_break(self, employee_id: int, now: datetime, *, confirm_over_limit: bool = False) -> Optional[BreakEntry]:
        """Close the open break.

        Over the kind's limit the break is only closed when the caller has
        confirmed; otherwise BreakOverLimitError is raised and nothing changes.
        """

        entry = self.find_open(employee_id)
        if entry is None:
            logger.info("Employee %s has no open break to end", employee_id)
            return None

        self.check_interval(entry, now)
        duration = elapsed_minutes(entry.start_time, now)
        limit = self.limit_for(entry.break_kind)
        if duration > limit:
            if not confirm_over_limit:
                raise BreakOverLimitError(duration, limit, entry)
            logger.warning(
                "Employee %s closed %s break %s over limit (%d > %d min)",
                employee_id,
                entry.break_kind.value,
                entry.entry_id,
                duration,
                limit,
            )

        return self.close_entry(entry, now)
