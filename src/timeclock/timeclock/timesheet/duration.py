from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

_MINUTE_MS = 60_000


def elapsed_minutes(start: datetime, end: Optional[datetime] = None, *, now: Optional[datetime] = None) -> int:
    """Whole minutes from ``start`` to ``end``, rounded to nearest (half up).

    When ``end`` is None the entry is still open and ``now`` stands in.
    Values are not clamped; closing code rejects ``end <= start`` first.
    """

    if end is None:
        if now is None:
            raise ValueError("An open interval needs 'now'")
        end = now

    millis = (end - start) // timedelta(milliseconds=1)
    return (millis + _MINUTE_MS // 2) // _MINUTE_MS
