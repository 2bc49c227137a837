from datetime import date

import pytest
from flask import Flask

from src.workshop_ops.workshop_ops.attendance.controller import register as register_attendance
from src.workshop_ops.workshop_ops.attendance.service import AttendanceService
from src.workshop_ops.workshop_ops.breaks.controller import register as register_breaks
from src.workshop_ops.workshop_ops.breaks.service import BreakService
from src.workshop_ops.workshop_ops.container import Container
from src.workshop_ops.workshop_ops.core.enums import Role
from src.workshop_ops.workshop_ops.core.exceptions import DataAccessFailure
from src.workshop_ops.workshop_ops.reconciliation.controller import register as register_reconciliation
from src.workshop_ops.workshop_ops.reconciliation.scanner import IssueScanner
from src.workshop_ops.workshop_ops.reconciliation.service import IssueClearService


@pytest.fixture
def client(engine, attendance_repo, work_records_repo, breaks_repo, clears_repo):
    container = Container(
        conn=None,
        settings=engine.settings,
        breaks_repo=breaks_repo,
        attendance_repo=attendance_repo,
        work_records_repo=work_records_repo,
        clears_repo=clears_repo,
        break_service=BreakService(breaks_repo),
        attendance_service=AttendanceService(attendance_repo, breaks_repo),
        reconciliation_engine=engine,
        issue_scanner=IssueScanner(engine, attendance_repo),
        issue_clear_service=IssueClearService(clears_repo),
    )
    app = Flask(__name__)
    app.secret_key = "test-secret"
    app.config["TESTING"] = True
    register_breaks(app, container)
    register_attendance(app, container)
    register_reconciliation(app, container)
    return app.test_client()


def _login(client, user_id=1, role=Role.FIELD_WORKER):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role.value


def test_requests_without_session_are_rejected(client):
    resp = client.get("/api/analytics/work-record-issues")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_reconcile_range_returns_serialized_results(client, attendance_repo):
    attendance_repo.add(1, date(2025, 3, 7), "08:30", "17:30")
    _login(client, user_id=1)

    resp = client.get("/api/analytics/reconcile?user_id=1&start=2025-03-06&end=2025-03-07")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert len(data) == 1
    assert data[0]["work_date"] == "2025-03-07"
    assert data[0]["classification"] == "missing_report"
    assert data[0]["needs_attention"] is True


def test_workers_cannot_reconcile_other_workers(client):
    _login(client, user_id=2)

    resp = client.get("/api/analytics/reconcile?user_id=1&start=2025-03-07")

    assert resp.status_code == 403


def test_bad_dates_are_a_client_error(client):
    _login(client, user_id=1)

    resp = client.get("/api/analytics/reconcile?user_id=1&start=07-03-2025")

    assert resp.status_code == 400


def test_clear_then_list_clears(client, clears_repo):
    _login(client, user_id=5, role=Role.SUB_ADMIN)

    first = client.post("/api/analytics/work-record-issues/clear", json={"user_id": 1, "work_date": "2025-03-07"})
    second = client.post("/api/analytics/work-record-issues/clear", json={"user_id": 1, "work_date": "2025-03-07"})
    listed = client.get("/api/analytics/work-record-issue-clears")

    assert first.get_json()["data"] == {"already_cleared": False}
    assert second.get_json()["data"] == {"already_cleared": True}
    assert listed.get_json()["data"][0]["cleared_by"] == 5


def test_field_worker_cannot_list_clears(client):
    _login(client)

    assert client.get("/api/analytics/work-record-issue-clears").status_code == 403


def test_storage_failure_maps_to_service_unavailable(client, attendance_repo):
    def broken(**kwargs):
        raise DataAccessFailure("down")

    attendance_repo.list_candidates = broken
    _login(client)

    resp = client.get("/api/analytics/low-work")

    assert resp.status_code == 503


def test_break_admin_endpoints_enforce_roles_and_validation(client, breaks_repo):
    _login(client, role=Role.SUB_ADMIN)
    forbidden = client.post("/api/break-times", json={"name": "Tea", "start_time": "15:00", "end_time": "15:15"})

    _login(client, role=Role.ADMIN)
    invalid = client.post("/api/break-times", json={"name": "Tea", "start_time": "3pm", "end_time": "15:15"})
    created = client.post("/api/break-times", json={"name": "Tea", "start_time": "15:00", "end_time": "15:15"})
    listed = client.get("/api/break-times")

    assert forbidden.status_code == 403
    assert invalid.status_code == 400
    assert created.status_code == 201
    assert {b["name"] for b in listed.get_json()["data"]} == {"Lunch", "Tea"}


def test_recalculate_work_minutes_endpoint(client, attendance_repo):
    attendance_repo.add(1, date(2025, 3, 7), "09:00", "18:00", stored_work_minutes=0)
    _login(client, role=Role.ADMIN)

    resp = client.post("/api/attendance/recalculate-work-minutes")

    assert resp.status_code == 200
    assert resp.get_json()["data"]["updated"] == 1
