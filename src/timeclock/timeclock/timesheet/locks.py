from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class EmployeeLocks:
    """One lock per employee id.

    Commands for the same employee run one at a time; different employees
    never wait on each other. Locks live for the process lifetime, so the
    registry grows with the number of distinct employees and no further.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def _lock_for(self, employee_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(employee_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[employee_id] = lock
            return lock

    @contextmanager
    def hold(self, employee_id: int) -> Iterator[None]:
        lock = self._lock_for(employee_id)
        with lock:
            yield
