from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 instant. Naive and non-string values are rejected."""
    if not isinstance(value, str):
        raise ValueError(f"Instant {value!r} is not an ISO-8601 string")
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        raise ValueError(f"Instant {value!r} has no UTC offset")
    return parsed


def minutes_since_midnight(value: datetime | time) -> int:
    return value.hour * 60 + value.minute


def format_duration(minutes: Optional[int]) -> str:
    """Render minutes as ``"Xh Ym"`` (``"0h 0m"`` for empty values)."""
    if not minutes:
        return "0h 0m"
    return f"{minutes // 60}h {minutes % 60}m"
