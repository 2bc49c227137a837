from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_role, current_user_id, json_endpoint, ok
from ..common.validators import require_role
from ..container import Container
from ..core.enums import MANAGER_ROLES
from ..core.exceptions import ValidationError
from .scanner import EXCESSIVE_WORK, LOW_WORK, WORK_RECORD_ISSUES

_MAX_RANGE_DAYS = 62


def _parse_date(value, field_name: str) -> date:
    if not value:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(str(value))
    except ValueError as e:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD") from e


def _parse_user_id(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError("user_id must be an integer") from e


def register(app: Flask, container: Container) -> None:
    @app.route("/api/analytics/work-record-issues", methods=["GET"], endpoint="work_record_issues")
    @json_endpoint
    def work_record_issues():
        return ok(container.issue_scanner.scan(WORK_RECORD_ISSUES))

    @app.route("/api/analytics/excessive-work", methods=["GET"], endpoint="excessive_work_users")
    @json_endpoint
    def excessive_work_users():
        return ok(container.issue_scanner.scan(EXCESSIVE_WORK))

    @app.route("/api/analytics/low-work", methods=["GET"], endpoint="low_work_users")
    @json_endpoint
    def low_work_users():
        return ok(container.issue_scanner.scan(LOW_WORK))

    @app.route("/api/analytics/reconcile", methods=["GET"], endpoint="reconcile_range")
    @json_endpoint
    def reconcile_range():
        user_id = _parse_user_id(request.args.get("user_id"))
        if user_id != current_user_id():
            require_role(current_role(), MANAGER_ROLES)

        start = _parse_date(request.args.get("start"), "start")
        end = _parse_date(request.args.get("end") or request.args.get("start"), "end")
        if end < start:
            raise ValidationError("end must not be before start")
        if (end - start).days >= _MAX_RANGE_DAYS:
            raise ValidationError(f"Range must be shorter than {_MAX_RANGE_DAYS} days")

        dates = [start + timedelta(days=i) for i in range((end - start).days + 1)]
        return ok(container.reconciliation_engine.reconcile_range(user_id, dates))

    @app.route("/api/analytics/work-report-detail", methods=["GET"], endpoint="work_report_detail")
    @json_endpoint
    def work_report_detail():
        user_id = _parse_user_id(request.args.get("user_id"))
        work_date = _parse_date(request.args.get("work_date"), "work_date")
        detail = container.reconciliation_engine.detail_day(user_id, work_date)
        if detail is None:
            raise ValidationError("No attendance or work records for this day")
        return ok(detail)

    @app.route("/api/analytics/work-record-issues/clear", methods=["POST"], endpoint="clear_work_record_issue")
    @json_endpoint
    def clear_work_record_issue():
        data = request.get_json(silent=True) or {}
        created = container.issue_clear_service.clear_issue(
            current_user_id=current_user_id(),
            user_id=_parse_user_id(data.get("user_id")),
            work_date=_parse_date(data.get("work_date"), "work_date"),
        )
        return ok({"already_cleared": not created})

    @app.route("/api/analytics/work-record-issue-clears", methods=["GET"], endpoint="work_record_issue_clears")
    @json_endpoint
    def work_record_issue_clears():
        return ok(list(container.issue_clear_service.list_clears(current_role=current_role())))
