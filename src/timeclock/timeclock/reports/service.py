from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import format_duration
from ..timesheet.repository import WorkEntryRepository


@dataclass(frozen=True)
class DailySummary:
    entry_date: date
    departments: list[dict]
    grand_total_minutes: int

    @property
    def grand_total(self) -> str:
        return format_duration(self.grand_total_minutes)


class DepartmentSummaryService:
    """Admin view: booked minutes of one day, department -> task -> employee.

    Only closed work entries count; entries still in progress are left out.
    """

    def __init__(self, work_entries: WorkEntryRepository):
        self._work_entries = work_entries

    def build_daily_summary(self, entry_date: date) -> DailySummary:
        rows = self._work_entries.list_closed_report_rows(entry_date)

        departments: dict[int, dict] = {}
        grand_total = 0

        for r in rows:
            dept = departments.get(r.department_id)
            if not dept:
                dept = {
                    "department_id": r.department_id,
                    "department_name": r.department_name,
                    "tasks": {},
                    "total_minutes": 0,
                }
                departments[r.department_id] = dept

            task = dept["tasks"].get(r.task_name)
            if not task:
                task = {"task_name": r.task_name, "total_minutes": 0, "employees": {}}
                dept["tasks"][r.task_name] = task

            task["total_minutes"] += r.duration_minutes
            task["employees"][r.employee_name] = task["employees"].get(r.employee_name, 0) + r.duration_minutes
            dept["total_minutes"] += r.duration_minutes
            grand_total += r.duration_minutes

        out = []
        for dept in departments.values():
            tasks = []
            for task in dept["tasks"].values():
                tasks.append(
                    {
                        "task_name": task["task_name"],
                        "total_minutes": task["total_minutes"],
                        "total": format_duration(task["total_minutes"]),
                        "employee_count": len(task["employees"]),
                        "employees": [
                            {"name": name, "minutes": minutes, "total": format_duration(minutes)}
                            for name, minutes in task["employees"].items()
                        ],
                    }
                )
            tasks.sort(key=lambda t: t["total_minutes"], reverse=True)

            out.append(
                {
                    "department_id": dept["department_id"],
                    "department_name": dept["department_name"],
                    "total_minutes": dept["total_minutes"],
                    "total": format_duration(dept["total_minutes"]),
                    "tasks": tasks,
                }
            )

        return DailySummary(entry_date=entry_date, departments=out, grand_total_minutes=grand_total)
