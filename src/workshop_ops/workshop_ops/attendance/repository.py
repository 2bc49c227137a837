from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import AttendanceRecord, ScanCandidate


class AttendanceRepository(Protocol):
    def fetch_attendance(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        """The worker-day's record, only when a clock-in is present."""

        raise NotImplementedError

    def list_candidates(
        self,
        *,
        work_dates: Sequence[date],
        include_roles: Optional[Iterable[Role]] = None,
        exclude_roles: Optional[Iterable[Role]] = None,
    ) -> Sequence[ScanCandidate]:
        raise NotImplementedError

    def list_closed_records(self) -> Sequence[AttendanceRecord]:
        """Every record with both clock-in and clock-out set."""

        raise NotImplementedError

    def update_work_minutes(self, *, attendance_id: int, work_minutes: int) -> bool:
        raise NotImplementedError
