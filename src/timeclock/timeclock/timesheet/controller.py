from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.api import api_errors, json_error
from ..common.datetime_utils import format_duration, parse_iso_date, parse_iso_datetime
from ..container import Container
from .model import BreakEntry, DailyTotals, WorkEntry


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def entry_to_dict(entry) -> Optional[dict]:
    if entry is None:
        return None

    data = {
        "entry_id": entry.entry_id,
        "employee_id": entry.employee_id,
        "start_time": _iso(entry.start_time),
        "end_time": _iso(entry.end_time),
        "duration_minutes": entry.duration_minutes,
        "entry_date": _iso(entry.entry_date),
    }
    if isinstance(entry, WorkEntry):
        data.update(
            kind="work",
            department_id=entry.department_id,
            task_id=entry.task_id,
            shift_id=entry.shift_id,
        )
    elif isinstance(entry, BreakEntry):
        data.update(kind="break", break_kind=entry.break_kind.value)
    return data


def totals_to_dict(totals: DailyTotals) -> dict:
    return {
        "work_minutes": totals.work_minutes,
        "paid_break_minutes": totals.paid_break_minutes,
        "unpaid_break_minutes": totals.unpaid_break_minutes,
        "work_total": format_duration(totals.work_minutes),
    }


def _closed_response(entry, nothing_message: str):
    if entry is None:
        return jsonify({"success": True, "closed": False, "message": nothing_message, "entry": None}), 200
    return jsonify({"success": True, "closed": True, "entry": entry_to_dict(entry)}), 200


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register(app: Flask, container: Container) -> None:
    svc = container.time_accounting_service
    adjustments = container.adjustment_service

    @app.route("/api/employees/<int:employee_id>/tasks/start", methods=["POST"], endpoint="api_start_task")
    @api_errors
    def api_start_task(employee_id: int):
        data = _payload()
        entry = svc.start_task(employee_id, data.get("department_id"), data.get("task_id"))
        return jsonify({"success": True, "entry": entry_to_dict(entry)}), 201

    @app.route("/api/employees/<int:employee_id>/tasks/end", methods=["POST"], endpoint="api_end_task")
    @api_errors
    def api_end_task(employee_id: int):
        return _closed_response(svc.end_task(employee_id), "No task in progress")

    @app.route("/api/employees/<int:employee_id>/breaks/start", methods=["POST"], endpoint="api_start_break")
    @api_errors
    def api_start_break(employee_id: int):
        data = _payload()
        entry = svc.start_break(employee_id, data.get("kind", ""))
        return jsonify({"success": True, "entry": entry_to_dict(entry)}), 201

    @app.route("/api/employees/<int:employee_id>/breaks/end", methods=["POST"], endpoint="api_end_break")
    @api_errors
    def api_end_break(employee_id: int):
        confirm = bool(_payload().get("confirm", False))
        return _closed_response(svc.end_break(employee_id, confirm_over_limit=confirm), "No break in progress")

    @app.route("/api/employees/<int:employee_id>/state", methods=["GET"], endpoint="api_current_state")
    @api_errors
    def api_current_state(employee_id: int):
        current = svc.current_state(employee_id)
        return jsonify({"success": True, "state": current.state.value, "entry": entry_to_dict(current.entry)})

    @app.route("/api/employees/<int:employee_id>/totals", methods=["GET"], endpoint="api_daily_totals")
    @api_errors
    def api_daily_totals(employee_id: int):
        raw = (request.args.get("date") or "").strip()
        if raw:
            try:
                on_date = parse_iso_date(raw)
            except ValueError:
                return json_error("date must be YYYY-MM-DD", 400)
        else:
            on_date = svc.clock.local_date(svc.clock.now())

        totals = svc.daily_totals(employee_id, on_date)
        return jsonify({"success": True, "date": on_date.isoformat(), "totals": totals_to_dict(totals)})

    @app.route("/api/employees/<int:employee_id>/today", methods=["GET"], endpoint="api_todays_activity")
    @api_errors
    def api_todays_activity(employee_id: int):
        activity = svc.todays_activity(employee_id)
        return jsonify(
            {
                "success": True,
                "date": activity.entry_date.isoformat(),
                "work_entries": [entry_to_dict(e) for e in activity.work_entries],
                "break_entries": [entry_to_dict(e) for e in activity.break_entries],
                "totals": totals_to_dict(activity.totals),
            }
        )

    def _times_from_payload():
        data = _payload()
        try:
            start_time = parse_iso_datetime(data.get("start_time") or "")
            end_raw = data.get("end_time")
            end_time = parse_iso_datetime(end_raw) if end_raw else None
        except ValueError:
            return None, None, data
        return start_time, end_time, data

    @app.route("/api/work-entries/<int:entry_id>", methods=["PATCH"], endpoint="api_adjust_work_entry")
    @api_errors
    def api_adjust_work_entry(entry_id: int):
        start_time, end_time, _ = _times_from_payload()
        if start_time is None:
            return json_error("start_time/end_time must be ISO-8601 with UTC offset", 400)
        entry = adjustments.adjust_work_entry(entry_id, start_time=start_time, end_time=end_time)
        return jsonify({"success": True, "entry": entry_to_dict(entry)})

    @app.route("/api/work-entries/<int:entry_id>", methods=["DELETE"], endpoint="api_delete_work_entry")
    @api_errors
    def api_delete_work_entry(entry_id: int):
        adjustments.delete_work_entry(entry_id)
        return jsonify({"success": True})

    @app.route("/api/break-entries/<int:entry_id>", methods=["PATCH"], endpoint="api_adjust_break_entry")
    @api_errors
    def api_adjust_break_entry(entry_id: int):
        start_time, end_time, data = _times_from_payload()
        if start_time is None:
            return json_error("start_time/end_time must be ISO-8601 with UTC offset", 400)
        entry = adjustments.adjust_break_entry(
            entry_id,
            start_time=start_time,
            end_time=end_time,
            break_kind=data.get("kind"),
        )
        return jsonify({"success": True, "entry": entry_to_dict(entry)})

    @app.route("/api/break-entries/<int:entry_id>", methods=["DELETE"], endpoint="api_delete_break_entry")
    @api_errors
    def api_delete_break_entry(entry_id: int):
        adjustments.delete_break_entry(entry_id)
        return jsonify({"success": True})
