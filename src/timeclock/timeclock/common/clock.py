from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Protocol


class Clock(Protocol):
    """Time source for the engine.

    Every "now" of the engine comes from here, and so does the employees'
    local calendar (entry dates, shift windows).
    """

    def now(self) -> datetime:
        raise NotImplementedError

    def to_local(self, instant: datetime) -> datetime:
        raise NotImplementedError

    def local_date(self, instant: datetime) -> date:
        raise NotImplementedError


class SystemClock:
    """Wall clock bound to the employees' timezone."""

    def __init__(self, tz: tzinfo):
        self._tz = tz

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def to_local(self, instant: datetime) -> datetime:
        if instant.tzinfo is None:
            raise ValueError("Naive datetimes are not accepted as instants")
        return instant.astimezone(self._tz)

    def local_date(self, instant: datetime) -> date:
        return self.to_local(instant).date()
