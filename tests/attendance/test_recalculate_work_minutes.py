from datetime import date

import pytest

from src.workshop_ops.workshop_ops.attendance.service import AttendanceService
from src.workshop_ops.workshop_ops.core.enums import Role
from src.workshop_ops.workshop_ops.core.exceptions import AuthorizationError, DataAccessFailure


def test_only_changed_rows_are_written(attendance_repo, breaks_repo):
    unchanged = attendance_repo.add(1, date(2025, 3, 3), "09:00", "18:00", stored_work_minutes=480)
    stale = attendance_repo.add(2, date(2025, 3, 3), "07:00", "16:00", stored_work_minutes=450)
    attendance_repo.add(3, date(2025, 3, 3), "09:00", None)

    summary = AttendanceService(attendance_repo, breaks_repo).recalculate_all_work_minutes(current_role=Role.ADMIN)

    assert summary.total == 2
    assert summary.updated == 1
    assert summary.errors == 0
    # No 08:30 snap here: 07:00-16:00 minus lunch.
    assert attendance_repo.updates == [(stale.attendance_id, 480)]
    assert unchanged.attendance_id not in [a for a, _ in attendance_repo.updates]


def test_failed_rows_are_counted_and_the_rest_continue(attendance_repo, breaks_repo):
    for user_id in range(1, 15):
        attendance_repo.add(user_id, date(2025, 3, 3), "09:00", "18:00", stored_work_minutes=0)

    def failing_update(*, attendance_id, work_minutes):
        if attendance_id % 2 == 0:
            raise DataAccessFailure("lock wait timeout")
        attendance_repo.updates.append((attendance_id, work_minutes))
        return True

    attendance_repo.update_work_minutes = failing_update

    summary = AttendanceService(attendance_repo, breaks_repo).recalculate_all_work_minutes(current_role=Role.SUB_ADMIN)

    assert summary.total == 14
    assert summary.updated == 7
    assert summary.errors == 7
    assert len(summary.error_details) == 7
    assert "lock wait timeout" in summary.error_details[0]


def test_error_details_are_capped(attendance_repo, breaks_repo):
    for user_id in range(1, 13):
        attendance_repo.add(user_id, date(2025, 3, 3), "09:00", "18:00", stored_work_minutes=0)

    def always_fail(*, attendance_id, work_minutes):
        raise DataAccessFailure("gone")

    attendance_repo.update_work_minutes = always_fail

    summary = AttendanceService(attendance_repo, breaks_repo).recalculate_all_work_minutes(current_role=Role.ADMIN)

    assert summary.errors == 12
    assert len(summary.error_details) == 10


def test_field_workers_cannot_recalculate(attendance_repo, breaks_repo):
    with pytest.raises(AuthorizationError):
        AttendanceService(attendance_repo, breaks_repo).recalculate_all_work_minutes(current_role=Role.FIELD_WORKER)
