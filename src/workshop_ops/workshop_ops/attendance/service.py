from __future__ import annotations

import structlog

from ..breaks.catalog import BreakCatalog
from ..breaks.repository import BreakRepository
from ..common.validators import require_role
from ..core.constants import RECALCULATION_ERROR_DETAIL_LIMIT
from ..core.enums import MANAGER_ROLES, Role
from ..core.exceptions import DataAccessFailure
from .calculator import AttendanceMinutesCalculator
from .model import RecalculationSummary
from .repository import AttendanceRepository

log = structlog.get_logger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance_repo: AttendanceRepository,
        breaks_repo: BreakRepository,
        *,
        calculator: AttendanceMinutesCalculator | None = None,
    ):
        self._attendance = attendance_repo
        self._breaks = breaks_repo
        self._calculator = calculator or AttendanceMinutesCalculator()

    def recalculate_all_work_minutes(self, *, current_role: Role) -> RecalculationSummary:
        """Rewrite the cached workMinutes of every closed record.

        Uses the current break configuration without the 08:30 snap; only rows
        whose value changed are written. A failing row is counted and skipped.
        """

        require_role(current_role, MANAGER_ROLES)

        catalog = BreakCatalog(self._breaks.fetch_active_break_windows())
        records = self._attendance.list_closed_records()

        updated = 0
        errors: list[str] = []
        for record in records:
            minutes = self._calculator.compute(
                record.clock_in,
                record.clock_out,
                catalog,
                ignore_before_0830=False,
            )
            if record.stored_work_minutes == minutes:
                continue
            try:
                self._attendance.update_work_minutes(attendance_id=record.attendance_id, work_minutes=minutes)
            except DataAccessFailure as e:
                log.warning("work_minutes_update_failed", attendance_id=record.attendance_id, error=str(e))
                errors.append(f"Record {record.attendance_id}: {e}")
                continue
            updated += 1

        log.info("work_minutes_recalculated", total=len(records), updated=updated, errors=len(errors))
        return RecalculationSummary(
            total=len(records),
            updated=updated,
            errors=len(errors),
            error_details=tuple(errors[:RECALCULATION_ERROR_DETAIL_LIMIT]),
        )
