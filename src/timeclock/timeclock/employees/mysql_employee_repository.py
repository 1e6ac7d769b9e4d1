from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_instant, to_db_instant
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, employee_code, is_temp, position, pin_set_at"


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        employee_code=r["employee_code"],
        is_temp=bool(r.get("is_temp")),
        position=r.get("position") or "Employee",
        pin_set_at=from_db_instant(r.get("pin_set_at")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_where(self, clause: str, value: Any) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {clause}=%s LIMIT 1", (value,))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._get_where("employee_id", int(employee_id))

    def get_by_name(self, name: str) -> Optional[Employee]:
        return self._get_where("name", name)

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return self._get_where("employee_code", employee_code)

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def create(self, *, name: str, employee_code: str, is_temp: bool, position: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, employee_code, is_temp, position)
                VALUES(%s,%s,%s,%s)
                """,
                (name, employee_code, int(bool(is_temp)), position),
            )
            return int(cur.lastrowid)

    def set_pin(self, employee_id: int, *, pin_hash: str, pin_set_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET security_pin=%s, pin_set_at=%s WHERE employee_id=%s",
                (pin_hash, to_db_instant(pin_set_at), int(employee_id)),
            )
            return cur.rowcount > 0

    def clear_pin(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET security_pin=NULL, pin_set_at=NULL WHERE employee_id=%s",
                (int(employee_id),),
            )
            return cur.rowcount > 0
