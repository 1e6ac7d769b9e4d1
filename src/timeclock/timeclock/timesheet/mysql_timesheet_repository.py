from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import BreakKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_instant, to_db_instant
from .model import BreakEntry, WorkEntry, WorkEntryReportRow
from .repository import BreakEntryRepository, WorkEntryRepository

_WORK_COLUMNS = "entry_id, employee_id, department_id, task_id, start_time, end_time, duration_minutes, shift_id, entry_date"
_BREAK_COLUMNS = "entry_id, employee_id, break_type, start_time, end_time, duration_minutes, entry_date"


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def _row_to_work(r: Dict[str, Any]) -> WorkEntry:
    return WorkEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        department_id=int(r["department_id"]),
        task_id=int(r["task_id"]),
        start_time=from_db_instant(r["start_time"]),
        end_time=from_db_instant(r.get("end_time")),
        duration_minutes=_optional_int(r.get("duration_minutes")),
        shift_id=_optional_int(r.get("shift_id")),
        entry_date=r["entry_date"],
    )


def _row_to_break(r: Dict[str, Any]) -> BreakEntry:
    return BreakEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        break_kind=BreakKind(r["break_type"]),
        start_time=from_db_instant(r["start_time"]),
        end_time=from_db_instant(r.get("end_time")),
        duration_minutes=_optional_int(r.get("duration_minutes")),
        entry_date=r["entry_date"],
    )


class MySQLWorkEntryRepository(WorkEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_open(self, employee_id: int) -> Optional[WorkEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_WORK_COLUMNS}
                FROM time_entries
                WHERE employee_id=%s AND end_time IS NULL
                ORDER BY start_time DESC
                LIMIT 1
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _row_to_work(r) if r else None

    def get_by_id(self, entry_id: int) -> Optional[WorkEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_WORK_COLUMNS} FROM time_entries WHERE entry_id=%s", (entry_id,))
            r = fetchone(cur)
            return _row_to_work(r) if r else None

    def insert(
        self,
        *,
        employee_id: int,
        department_id: int,
        task_id: int,
        start_time: datetime,
        shift_id: Optional[int],
        entry_date: date,
    ) -> WorkEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(employee_id, department_id, task_id, start_time, shift_id, entry_date)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (employee_id, department_id, task_id, to_db_instant(start_time), shift_id, entry_date),
            )
            entry_id = int(cur.lastrowid)

        return WorkEntry(
            entry_id=entry_id,
            employee_id=employee_id,
            department_id=department_id,
            task_id=task_id,
            start_time=start_time,
            end_time=None,
            duration_minutes=None,
            shift_id=shift_id,
            entry_date=entry_date,
        )

    def close(self, *, entry_id: int, end_time: datetime, duration_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET end_time=%s, duration_minutes=%s
                WHERE entry_id=%s AND end_time IS NULL
                """,
                (to_db_instant(end_time), int(duration_minutes), entry_id),
            )
            return cur.rowcount > 0

    def list_for_employee_and_date(self, employee_id: int, entry_date: date) -> Sequence[WorkEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_WORK_COLUMNS}
                FROM time_entries
                WHERE employee_id=%s AND entry_date=%s
                ORDER BY start_time
                """,
                (employee_id, entry_date),
            )
            return [_row_to_work(r) for r in fetchall(cur)]

    def update_times(
        self,
        *,
        entry_id: int,
        start_time: datetime,
        end_time: Optional[datetime],
        duration_minutes: Optional[int],
        entry_date: date,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET start_time=%s, end_time=%s, duration_minutes=%s, entry_date=%s
                WHERE entry_id=%s
                """,
                (to_db_instant(start_time), to_db_instant(end_time), duration_minutes, entry_date, int(entry_id)),
            )
            return cur.rowcount > 0

    def delete(self, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            return cur.rowcount > 0

    def list_closed_report_rows(self, entry_date: date) -> Sequence[WorkEntryReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    te.entry_id, te.employee_id, e.name AS employee_name,
                    d.department_id, d.name AS department_name,
                    t.task_id, t.name AS task_name,
                    te.entry_date, te.duration_minutes
                FROM time_entries te
                JOIN employees e ON e.employee_id = te.employee_id
                JOIN departments d ON d.department_id = te.department_id
                JOIN tasks t ON t.task_id = te.task_id
                WHERE te.entry_date=%s AND te.end_time IS NOT NULL
                ORDER BY d.name, t.name, te.start_time
                """,
                (entry_date,),
            )
            return [
                WorkEntryReportRow(
                    entry_id=int(r["entry_id"]),
                    employee_id=int(r["employee_id"]),
                    employee_name=r["employee_name"],
                    department_id=int(r["department_id"]),
                    department_name=r["department_name"],
                    task_id=int(r["task_id"]),
                    task_name=r["task_name"],
                    entry_date=r["entry_date"],
                    duration_minutes=int(r.get("duration_minutes") or 0),
                )
                for r in fetchall(cur)
            ]


class MySQLBreakEntryRepository(BreakEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_open(self, employee_id: int) -> Optional[BreakEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_BREAK_COLUMNS}
                FROM break_entries
                WHERE employee_id=%s AND end_time IS NULL
                ORDER BY start_time DESC
                LIMIT 1
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _row_to_break(r) if r else None

    def get_by_id(self, entry_id: int) -> Optional[BreakEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_BREAK_COLUMNS} FROM break_entries WHERE entry_id=%s", (entry_id,))
            r = fetchone(cur)
            return _row_to_break(r) if r else None

    def insert(
        self,
        *,
        employee_id: int,
        break_kind: BreakKind,
        start_time: datetime,
        entry_date: date,
    ) -> BreakEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO break_entries(employee_id, break_type, start_time, entry_date)
                VALUES(%s,%s,%s,%s)
                """,
                (employee_id, break_kind.value, to_db_instant(start_time), entry_date),
            )
            entry_id = int(cur.lastrowid)

        return BreakEntry(
            entry_id=entry_id,
            employee_id=employee_id,
            break_kind=break_kind,
            start_time=start_time,
            end_time=None,
            duration_minutes=None,
            entry_date=entry_date,
        )

    def close(self, *, entry_id: int, end_time: datetime, duration_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE break_entries
                SET end_time=%s, duration_minutes=%s
                WHERE entry_id=%s AND end_time IS NULL
                """,
                (to_db_instant(end_time), int(duration_minutes), entry_id),
            )
            return cur.rowcount > 0

    def list_for_employee_and_date(self, employee_id: int, entry_date: date) -> Sequence[BreakEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_BREAK_COLUMNS}
                FROM break_entries
                WHERE employee_id=%s AND entry_date=%s
                ORDER BY start_time
                """,
                (employee_id, entry_date),
            )
            return [_row_to_break(r) for r in fetchall(cur)]

    def update_times(
        self,
        *,
        entry_id: int,
        start_time: datetime,
        end_time: Optional[datetime],
        duration_minutes: Optional[int],
        entry_date: date,
        break_kind: BreakKind,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE break_entries
                SET start_time=%s, end_time=%s, duration_minutes=%s, entry_date=%s, break_type=%s
                WHERE entry_id=%s
                """,
                (
                    to_db_instant(start_time),
                    to_db_instant(end_time),
                    duration_minutes,
                    entry_date,
                    break_kind.value,
                    int(entry_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM break_entries WHERE entry_id=%s", (int(entry_id),))
            return cur.rowcount > 0
