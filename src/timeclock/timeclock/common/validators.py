from __future__ import annotations

from ..core.enums import BreakKind
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive_id(value, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not valid")
    if parsed <= 0:
        raise ValidationError(f"{field_name} is not valid")
    return parsed


def require_pin(pin: str, *, length: int) -> str:
    if pin is None or len(pin) != length:
        raise ValidationError(f"PIN must be {length} digits")
    if not (pin.isascii() and pin.isdigit()):
        raise ValidationError("PIN must contain only numbers")
    return pin


def require_break_kind(value) -> BreakKind:
    """Accept a BreakKind or its name in any case, surrounding spaces ignored."""
    try:
        return BreakKind(str(getattr(value, "value", value)).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown break kind: {value!r}")
