from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, error_response, json_body
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    def _to_dict(e) -> dict:
        return {"employee_id": e.employee_id, "name": e.name}

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def admin_employees():
        return jsonify([_to_dict(e) for e in container.employee_service.list_employees()])

    @app.route("/api/admin/employees", methods=["POST"], endpoint="admin_employees_create")
    @admin_required
    def admin_employees_create():
        data = json_body()
        try:
            employee = container.employee_service.create_employee(
                name=str(data.get("name") or ""),
                pin=str(data.get("pin") or ""),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(_to_dict(employee)), 201

    @app.route("/api/admin/employees/<int:employee_id>", methods=["PUT"], endpoint="admin_employees_update")
    @admin_required
    def admin_employees_update(employee_id: int):
        data = json_body()
        try:
            employee = container.employee_service.update_employee(
                employee_id=employee_id,
                name=str(data.get("name") or ""),
                pin=str(data.get("pin") or ""),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(_to_dict(employee))

    @app.route("/api/admin/employees/<int:employee_id>", methods=["DELETE"], endpoint="admin_employees_delete")
    @admin_required
    def admin_employees_delete(employee_id: int):
        try:
            container.employee_service.delete_employee(employee_id=employee_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})
