from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class Shift:
    """Thực thể miền (domain): Ca làm việc (Shift).

    ``start_time >= end_time`` means the window runs past midnight.
    """

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    color: str = "#3b82f6"

    @property
    def wraps_midnight(self) -> bool:
        return (self.start_time.hour, self.start_time.minute) >= (self.end_time.hour, self.end_time.minute)
