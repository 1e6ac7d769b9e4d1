from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department, Task
from .repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT department_id, name FROM departments ORDER BY name")
            rows = fetchall(cur)
            return [Department(department_id=int(r["department_id"]), name=r["name"]) for r in rows]

    def list_tasks(self, department_id: int) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT task_id, department_id, name FROM tasks WHERE department_id=%s ORDER BY name",
                (int(department_id),),
            )
            rows = fetchall(cur)
            return [Task(task_id=int(r["task_id"]), department_id=int(r["department_id"]), name=r["name"]) for r in rows]

    def get_task(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT task_id, department_id, name FROM tasks WHERE task_id=%s", (int(task_id),))
            r = fetchone(cur)
            if not r:
                return None
            return Task(task_id=int(r["task_id"]), department_id=int(r["department_id"]), name=r["name"])
