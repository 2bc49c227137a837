from __future__ import annotations

from flask import Flask, request

from ..common.http import current_role, json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/break-times", methods=["GET"], endpoint="break_times_list")
    @json_endpoint
    def break_times_list():
        return ok(list(container.break_service.list_all()))

    @app.route("/api/break-times", methods=["POST"], endpoint="break_times_create")
    @json_endpoint
    def break_times_create():
        data = request.get_json(silent=True) or {}
        break_id = container.break_service.create(
            current_role=current_role(),
            name=str(data.get("name", "")),
            start_time=str(data.get("start_time", "")),
            end_time=str(data.get("end_time", "")),
            duration_minutes=data.get("duration_minutes"),
            is_active=bool(data.get("is_active", True)),
        )
        return ok({"break_id": break_id}, 201)

    @app.route("/api/break-times/<int:break_id>", methods=["PUT"], endpoint="break_times_update")
    @json_endpoint
    def break_times_update(break_id: int):
        data = request.get_json(silent=True) or {}
        container.break_service.update(
            current_role=current_role(),
            break_id=break_id,
            name=data.get("name"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            duration_minutes=data.get("duration_minutes"),
            is_active=data.get("is_active"),
        )
        return ok()

    @app.route("/api/break-times/<int:break_id>", methods=["DELETE"], endpoint="break_times_delete")
    @json_endpoint
    def break_times_delete(break_id: int):
        container.break_service.delete(current_role=current_role(), break_id=break_id)
        return ok()
