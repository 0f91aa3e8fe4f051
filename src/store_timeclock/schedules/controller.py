from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, error_response, json_body
from ..container import Container
from ..core.exceptions import DomainError, ValidationError


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: str | None, default: date) -> date:
        if not value:
            return default
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("Dates must be YYYY-MM-DD") from None

    def _entry_to_dict(e) -> dict:
        return {
            "employee_id": e.employee_id,
            "work_date": e.work_date.strftime("%Y-%m-%d"),
            "shift_id": e.shift_id,
            "store_id": e.store_id,
        }

    @app.route("/api/kiosk/<int:employee_id>/week", methods=["GET"], endpoint="kiosk_week")
    def kiosk_week(employee_id: int):
        today = container.clock.now().date()
        rows = container.schedule_service.week_for_employee(employee_id=employee_id, today=today)
        return jsonify(
            [
                {
                    "date": r.work_date.strftime("%Y-%m-%d"),
                    "weekday": r.weekday,
                    "shift_short_name": r.shift_short_name,
                    "store_name": r.store_name,
                    "is_today": r.is_today,
                }
                for r in rows
            ]
        )

    @app.route("/api/admin/schedules", methods=["GET"], endpoint="admin_schedules")
    @admin_required
    def admin_schedules():
        today = container.clock.now().date()
        try:
            start = _parse_date(request.args.get("start"), today)
            end = _parse_date(request.args.get("end"), today + timedelta(days=7))
            employee_id = request.args.get("employee_id", type=int)
            entries = container.schedule_service.list_range(start=start, end=end, employee_id=employee_id)
        except DomainError as e:
            return error_response(e)
        return jsonify([_entry_to_dict(e) for e in entries])

    @app.route("/api/admin/schedules", methods=["PUT"], endpoint="admin_schedules_assign")
    @admin_required
    def admin_schedules_assign():
        """Upsert one (employee, date) entry; shift_id "none" or null clears the day."""
        data = json_body()
        try:
            work_date = _parse_date(data.get("work_date"), container.clock.now().date())
            shift_id = data.get("shift_id")
            if shift_id in (None, "", "none"):
                shift_id = None
            store_id = data.get("store_id")
            entry = container.schedule_service.assign(
                employee_id=int(data.get("employee_id") or 0),
                work_date=work_date,
                shift_id=shift_id,
                store_id=int(store_id) if store_id not in (None, "") else None,
            )
        except (TypeError, ValueError):
            return error_response(ValidationError("employee_id/store_id must be integers"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "entry": _entry_to_dict(entry) if entry else None})
