from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api import api_errors, json_error
from ..container import Container
from .model import Employee


def employee_to_dict(employee: Employee) -> dict:
    return {
        "employee_id": employee.employee_id,
        "name": employee.name,
        "employee_code": employee.employee_code,
        "is_temp": employee.is_temp,
        "position": employee.position,
        "requires_pin_setup": employee.requires_pin_setup,
    }


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service

    @app.route("/api/employees", methods=["POST"], endpoint="api_register_employee")
    @api_errors
    def api_register_employee():
        data = _payload()
        employee = employees.register_employee(
            name=_text(data, "name"),
            is_temp=bool(data.get("is_temp", False)),
            position=_text(data, "position"),
        )
        return jsonify({"success": True, "employee": employee_to_dict(employee)}), 201

    @app.route("/api/employees/lookup", methods=["GET"], endpoint="api_lookup_employee")
    @api_errors
    def api_lookup_employee():
        employee = employees.find_by_name(request.args.get("name", ""))
        if not employee:
            return json_error(
                "Employee name not found. Enter your exact full name as registered or contact admin.",
                404,
            )
        return jsonify({"success": True, "employee": employee_to_dict(employee)})

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="api_get_employee")
    @api_errors
    def api_get_employee(employee_id: int):
        return jsonify({"success": True, "employee": employee_to_dict(employees.get(employee_id))})

    @app.route("/api/employees/<int:employee_id>/pin", methods=["POST"], endpoint="api_set_pin")
    @api_errors
    def api_set_pin(employee_id: int):
        data = _payload()
        employees.set_pin(employee_id, pin=str(data.get("pin", "")), confirm_pin=str(data.get("confirm_pin", "")))
        return jsonify({"success": True, "message": "PIN saved"})

    @app.route("/api/employees/<int:employee_id>/pin", methods=["DELETE"], endpoint="api_reset_pin")
    @api_errors
    def api_reset_pin(employee_id: int):
        employees.reset_pin(employee_id)
        return jsonify({"success": True, "message": "PIN reset, a new one is required at next sign-in"})
