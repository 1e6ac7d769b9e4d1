from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import minutes_since_midnight
from .model import Shift

logger = logging.getLogger(__name__)


def shift_contains(shift: Shift, minute_of_day: int) -> bool:
    start = minutes_since_midnight(shift.start_time)
    end = minutes_since_midnight(shift.end_time)

    if start < end:
        return start <= minute_of_day < end
    return minute_of_day >= start or minute_of_day < end


def resolve_shift(local_instant: datetime, shifts: Sequence[Shift]) -> Optional[Shift]:
    """Pick the shift a clock-in falls into.

    ``local_instant`` must already be in the employee's local time. The first
    matching shift in list order wins. When nothing matches, the first
    configured shift is returned; an empty configuration yields None.
    """

    if not shifts:
        return None

    minute_of_day = minutes_since_midnight(local_instant)
    for shift in shifts:
        if shift_contains(shift, minute_of_day):
            return shift

    logger.info(
        "No shift window contains %02d:%02d, falling back to %r",
        local_instant.hour,
        local_instant.minute,
        shifts[0].shift_name,
    )
    return shifts[0]
