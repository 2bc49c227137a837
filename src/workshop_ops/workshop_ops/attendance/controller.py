from __future__ import annotations

from flask import Flask

from ..common.http import current_role, json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/recalculate-work-minutes", methods=["POST"], endpoint="recalculate_work_minutes")
    @json_endpoint
    def recalculate_work_minutes():
        summary = container.attendance_service.recalculate_all_work_minutes(current_role=current_role())
        return ok(summary)
