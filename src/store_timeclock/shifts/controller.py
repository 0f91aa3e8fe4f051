from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, error_response, json_body
from ..container import Container
from ..core.exceptions import DomainError
from .model import Shift


def shift_to_dict(s: Shift) -> dict:
    return {
        "shift_id": s.shift_id,
        "name": s.name,
        "short_name": s.short_name,
        "start_time": s.start_time.strftime("%H:%M"),
        "end_time": s.end_time.strftime("%H:%M"),
        "color": s.color,
        "clock_in_before": s.clock_in_before,
        "clock_in_after": s.clock_in_after,
        "clock_out_before": s.clock_out_before,
        "clock_out_after": s.clock_out_after,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/shifts", methods=["GET"], endpoint="admin_shifts")
    @admin_required
    def admin_shifts():
        return jsonify([shift_to_dict(s) for s in container.shift_service.list_shifts()])

    @app.route("/api/admin/shifts", methods=["POST"], endpoint="admin_shifts_create")
    @admin_required
    def admin_shifts_create():
        try:
            shift = container.shift_service.save_shift(json_body())
        except DomainError as e:
            return error_response(e)
        return jsonify(shift_to_dict(shift)), 201

    @app.route("/api/admin/shifts/<shift_id>", methods=["PUT"], endpoint="admin_shifts_update")
    @admin_required
    def admin_shifts_update(shift_id: str):
        try:
            shift = container.shift_service.save_shift(json_body(), shift_id=shift_id)
        except DomainError as e:
            return error_response(e)
        return jsonify(shift_to_dict(shift))

    @app.route("/api/admin/shifts/<shift_id>", methods=["DELETE"], endpoint="admin_shifts_delete")
    @admin_required
    def admin_shifts_delete(shift_id: str):
        try:
            container.shift_service.delete_shift(shift_id=shift_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})
