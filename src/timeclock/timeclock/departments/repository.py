from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department, Task


class DepartmentRepository(Protocol):
    """Read-only view of the department/task catalog (CRUD lives elsewhere)."""

    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def list_tasks(self, department_id: int) -> Sequence[Task]:
        raise NotImplementedError

    def get_task(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError
