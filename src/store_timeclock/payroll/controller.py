from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_year_month
from ..common.http import admin_required, error_response
from ..container import Container
from ..core.exceptions import DomainError, ValidationError


def register(app: Flask, container: Container) -> None:
    def _month() -> tuple[int, int]:
        value = request.args.get("month")
        if not value:
            today = container.clock.now().date()
            return today.year, today.month
        try:
            return parse_year_month(value)
        except ValueError:
            raise ValidationError("month must be YYYY-MM") from None

    @app.route("/api/admin/reports/summary", methods=["GET"], endpoint="admin_report_summary")
    @admin_required
    def admin_report_summary():
        try:
            year, month = _month()
            summary = container.payroll_report_service.build_monthly_summary(
                year=year,
                month=month,
                employee_id=request.args.get("employee_id", type=int),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"year": year, "month": month, "rows": [s.as_row() for s in summary]})

    @app.route("/api/admin/reports/detail", methods=["GET"], endpoint="admin_report_detail")
    @admin_required
    def admin_report_detail():
        employee_id = request.args.get("employee_id", type=int)
        try:
            if employee_id is None:
                raise ValidationError("employee_id is required")
            year, month = _month()
            rows = container.payroll_report_service.build_daily_detail(year=year, month=month, employee_id=employee_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"year": year, "month": month, "employee_id": employee_id, "rows": [r.as_row() for r in rows]})
