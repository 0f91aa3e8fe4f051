from __future__ import annotations

import logging
from datetime import datetime

from flask import Flask, jsonify, request

from ..common.http import admin_required, error_response, json_body
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from ..geofence.provider import ReportedPositionProvider
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "employee_id": r.employee_id,
        "clock_in": r.clock_in.isoformat(),
        "clock_out": r.clock_out.isoformat() if r.clock_out else None,
        "late_hours": r.late_hours,
        "early_leave_hours": r.early_leave_hours,
        "clock_in_edited": r.clock_in_edited,
        "clock_out_edited": r.clock_out_edited,
    }


def _parse_datetime(value, field_name: str):
    if value in (None, ""):
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO datetime") from None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/kiosk/<int:employee_id>/pin", methods=["POST"], endpoint="kiosk_verify_pin")
    def kiosk_verify_pin(employee_id: int):
        try:
            employee = container.attendance_service.verify_pin(employee_id, str(json_body().get("pin", "")))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "employee_id": employee.employee_id, "name": employee.name})

    @app.route("/api/kiosk/<int:employee_id>/action", methods=["POST"], endpoint="kiosk_action")
    def kiosk_action(employee_id: int):
        """Clock in or out, decided by the employee's stored open-record state."""
        data = json_body()
        try:
            container.attendance_service.verify_pin(employee_id, str(data.get("pin", "")))
            result = container.attendance_service.record_action(
                employee_id,
                ReportedPositionProvider.from_payload(data),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Clock action failed for employee %s", employee_id)
            return jsonify({"success": False, "message": "System error while clocking"}), 500

        return jsonify(
            {
                "success": True,
                "action": result.action.value,
                "record": record_to_dict(result.record) if result.record else None,
                "deviation_hours": round(result.deviation_hours, 2) if result.deviation_hours else None,
                "distance_m": result.distance_m,
            }
        )

    @app.route("/api/admin/live-status", methods=["GET"], endpoint="admin_live_status")
    @admin_required
    def admin_live_status():
        rows = container.attendance_service.live_status()
        return jsonify(
            [
                {
                    "employee_id": r.employee_id,
                    "employee_name": r.employee_name,
                    "state": r.state.value,
                    "since": r.since.isoformat() if r.since else None,
                    "store_name": r.store_name,
                }
                for r in rows
            ]
        )

    @app.route("/api/admin/activity", methods=["GET"], endpoint="admin_activity")
    @admin_required
    def admin_activity():
        limit = request.args.get("limit", type=int) or 5
        events = container.attendance_service.recent_activity(limit=limit)
        return jsonify(
            [
                {
                    "attendance_id": e.attendance_id,
                    "employee_id": e.employee_id,
                    "employee_name": e.employee_name,
                    "action": e.action.value,
                    "at": e.at.strftime("%H:%M"),
                }
                for e in events
            ]
        )

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["PUT"], endpoint="admin_attendance_correct")
    @admin_required
    def admin_attendance_correct(attendance_id: int):
        data = json_body()
        try:
            clock_in = _parse_datetime(data.get("clock_in"), "clock_in")
            if clock_in is None:
                raise ValidationError("clock_in is required")
            record = container.attendance_service.correct_record(
                attendance_id,
                clock_in=clock_in,
                clock_out=_parse_datetime(data.get("clock_out"), "clock_out"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(record_to_dict(record))
