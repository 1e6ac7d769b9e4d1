from __future__ import annotations

from enum import Enum


class BreakKind(str, Enum):
    """Loại nghỉ giữa ca: có lương hoặc không lương."""

    PAID = "paid"
    UNPAID = "unpaid"


class ActivityState(str, Enum):
    """Trạng thái hiện tại của một nhân viên."""

    IDLE = "IDLE"
    WORKING = "WORKING"
    ON_BREAK = "ON_BREAK"
