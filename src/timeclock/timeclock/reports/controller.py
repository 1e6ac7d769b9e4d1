from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api import api_errors, json_error
from ..common.datetime_utils import parse_iso_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reports = container.department_summary_service
    clock = container.clock

    @app.route("/api/reports/daily", methods=["GET"], endpoint="api_daily_summary")
    @api_errors
    def api_daily_summary():
        raw = (request.args.get("date") or "").strip()
        try:
            entry_date = parse_iso_date(raw) if raw else clock.local_date(clock.now())
        except ValueError:
            return json_error("date must be YYYY-MM-DD", 400)

        summary = reports.build_daily_summary(entry_date)
        return jsonify(
            {
                "success": True,
                "date": summary.entry_date.isoformat(),
                "departments": summary.departments,
                "grand_total_minutes": summary.grand_total_minutes,
                "grand_total": summary.grand_total,
            }
        )
