from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(ValidationError):
    """Raised when a referenced employee or entry does not exist."""


class InvalidIntervalError(ValidationError):
    """Raised when an end instant is not strictly after its start."""

    def __init__(self, start_time, end_time):
        super().__init__(f"End time {end_time.isoformat()} must be after start time {start_time.isoformat()}")
        self.start_time = start_time
        self.end_time = end_time


class BreakOverLimitError(DomainError):
    """Advisory: the break ran past its configured limit.

    The break stays open until the caller confirms the close.
    """

    def __init__(self, duration_minutes: int, limit_minutes: int, entry: Any = None):
        super().__init__(f"Break lasted {duration_minutes} minutes, limit is {limit_minutes} minutes")
        self.duration_minutes = duration_minutes
        self.limit_minutes = limit_minutes
        self.entry = entry


class StorageError(DomainError):
    """Raised when the storage backend fails. Never retried here."""
