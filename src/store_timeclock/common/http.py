from __future__ import annotations

from functools import wraps

from flask import current_app, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ClockActionError,
    DomainError,
    ValidationError,
)


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if request.headers.get("X-Admin-Password") != current_app.config["ADMIN_PASSWORD"]:
            return error_response(AuthorizationError("Admin password required"))
        return view(*args, **kwargs)

    return wrapper


def error_response(exc: DomainError):
    if isinstance(exc, ClockActionError):
        body = {"success": False, "kind": exc.kind.value, "message": str(exc)}
        body.update(exc.details())
        return jsonify(body), 422

    status = 400
    if isinstance(exc, AuthenticationError):
        status = 401
    elif isinstance(exc, AuthorizationError):
        status = 403
    elif not isinstance(exc, ValidationError):
        status = 422
    return jsonify({"success": False, "message": str(exc)}), status


def json_body() -> dict:
    return request.get_json(silent=True) or {}
