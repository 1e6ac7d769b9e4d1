from __future__ import annotations

import dataclasses
import logging
from abc import ABC
from datetime import datetime
from typing import Generic, Optional, TypeVar

from ..core.exceptions import InvalidIntervalError
from .duration import elapsed_minutes

logger = logging.getLogger(__name__)

E = TypeVar("E")


class EntryManager(ABC, Generic[E]):
    """Shared state machine for one kind of entry (work or break).

    Managers registered with :meth:`exclusive_with` are mutually exclusive:
    opening an entry in one first closes the open entry of every other.
    Callers hold the employee lock around every command.
    """

    kind_label = "entry"

    def __init__(self, entries):
        self._entries = entries
        self._competitors: list[EntryManager] = []

    def exclusive_with(self, other: "EntryManager") -> None:
        if other is self or other in self._competitors:
            return
        self._competitors.append(other)
        other.exclusive_with(self)

    def find_open(self, employee_id: int) -> Optional[E]:
        return self._entries.find_open(employee_id)

    @staticmethod
    def check_interval(entry, end_time: datetime) -> None:
        if end_time <= entry.start_time:
            raise InvalidIntervalError(entry.start_time, end_time)

    def close_entry(self, entry: E, now: datetime) -> Optional[E]:
        """Close ``entry`` at ``now`` with a freshly computed duration.

        Returns None when storage reports the entry was closed elsewhere.
        """

        self.check_interval(entry, now)
        duration = elapsed_minutes(entry.start_time, now)

        if not self._entries.close(entry_id=entry.entry_id, end_time=now, duration_minutes=duration):
            logger.warning(
                "%s %s of employee %s was already closed",
                self.kind_label,
                entry.entry_id,
                entry.employee_id,
            )
            return None

        logger.info(
            "Closed %s %s of employee %s (%d min)",
            self.kind_label,
            entry.entry_id,
            entry.employee_id,
            duration,
        )
        return dataclasses.replace(entry, end_time=now, duration_minutes=duration)

    def close_before_open(self, employee_id: int, now: datetime) -> None:
        """Auto-close own open entry, then every competitor's.

        All intervals are checked before the first write.
        """

        pending = []
        for manager in [self, *self._competitors]:
            entry = manager.find_open(employee_id)
            if entry is not None:
                manager.check_interval(entry, now)
                pending.append((manager, entry))

        for manager, entry in pending:
            logger.info("Auto-closing open %s %s of employee %s", manager.kind_label, entry.entry_id, employee_id)
            manager.close_entry(entry, now)
