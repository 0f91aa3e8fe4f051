from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, error_response, json_body
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    def _to_dict(s) -> dict:
        return {
            "store_id": s.store_id,
            "name": s.name,
            "latitude": s.latitude,
            "longitude": s.longitude,
            "has_location": s.has_location,
        }

    @app.route("/api/admin/stores", methods=["GET"], endpoint="admin_stores")
    @admin_required
    def admin_stores():
        return jsonify([_to_dict(s) for s in container.store_service.list_stores()])

    @app.route("/api/admin/stores", methods=["POST"], endpoint="admin_stores_create")
    @admin_required
    def admin_stores_create():
        data = json_body()
        try:
            store = container.store_service.create_store(
                name=str(data.get("name") or ""),
                latitude=data.get("latitude", 0),
                longitude=data.get("longitude", 0),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(_to_dict(store)), 201

    @app.route("/api/admin/stores/<int:store_id>", methods=["PUT"], endpoint="admin_stores_update")
    @admin_required
    def admin_stores_update(store_id: int):
        data = json_body()
        try:
            store = container.store_service.update_store(
                store_id=store_id,
                name=str(data.get("name") or ""),
                latitude=data.get("latitude"),
                longitude=data.get("longitude"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(_to_dict(store))
