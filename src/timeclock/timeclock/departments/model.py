from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Department:
    department_id: int
    name: str


@dataclass(frozen=True)
class Task:
    task_id: int
    department_id: int
    name: str
