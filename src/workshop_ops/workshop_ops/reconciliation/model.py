from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..attendance.model import AttendanceBreakdown
from ..core.constants import (
    DEFAULT_EXCESSIVE_WORK_THRESHOLD_MINUTES,
    DEFAULT_MERGE_GAP_MINUTES,
    DEFAULT_MISMATCH_THRESHOLD_MINUTES,
    DEFAULT_SCAN_MAX_WORKERS,
    DEFAULT_TIMEZONE,
)
from ..core.enums import Classification
from ..work_records.deduction import IntervalDeduction


@dataclass(frozen=True)
class ReconciliationSettings:
    timezone: str = DEFAULT_TIMEZONE
    mismatch_threshold_minutes: int = DEFAULT_MISMATCH_THRESHOLD_MINUTES
    excessive_work_threshold_minutes: int = DEFAULT_EXCESSIVE_WORK_THRESHOLD_MINUTES
    merge_gap_minutes: int = DEFAULT_MERGE_GAP_MINUTES
    scan_max_workers: int = DEFAULT_SCAN_MAX_WORKERS


@dataclass(frozen=True)
class ReconciliationResult:
    user_id: int
    work_date: date
    attendance_minutes: int
    work_minutes: int
    difference_minutes: int
    classification: Classification
    excessive_work: bool = False
    cleared: bool = False
    session_count: int = 0

    @property
    def absolute_difference(self) -> int:
        return abs(self.difference_minutes)

    @property
    def needs_attention(self) -> bool:
        return not self.cleared and self.classification != Classification.OK

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "work_date": self.work_date.isoformat(),
            "attendance_minutes": self.attendance_minutes,
            "work_minutes": self.work_minutes,
            "difference_minutes": self.difference_minutes,
            "classification": self.classification.value,
            "excessive_work": self.excessive_work,
            "cleared": self.cleared,
            "session_count": self.session_count,
            "absolute_difference": self.absolute_difference,
            "needs_attention": self.needs_attention,
        }


@dataclass(frozen=True)
class SessionDetail:
    """One raw session with its own break-deducted duration."""

    record_id: int
    start: str
    end: str
    duration_minutes: int
    is_open: bool = False
    vehicle_number: Optional[str] = None
    process_name: Optional[str] = None


@dataclass(frozen=True)
class WorkReportDetail:
    user_id: int
    work_date: date
    attendance: Optional[AttendanceBreakdown]
    sessions: tuple[SessionDetail, ...]
    intervals: tuple[IntervalDeduction, ...]
    attendance_minutes: int
    work_minutes: int

    @property
    def difference_minutes(self) -> int:
        return self.work_minutes - self.attendance_minutes


@dataclass(frozen=True)
class IssueClear:
    clear_id: int
    user_id: int
    work_date: date
    cleared_by: int
    cleared_at: Optional[datetime] = None


@dataclass(frozen=True)
class FlaggedUser:
    user_id: int
    user_name: str
    dates: tuple[date, ...]
    results: tuple[ReconciliationResult, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ScanFailure:
    user_id: int
    work_date: date
    message: str


@dataclass(frozen=True)
class ScanReport:
    profile: str
    work_dates: tuple[date, ...]
    evaluated: int
    flagged: tuple[FlaggedUser, ...]
    failures: tuple[ScanFailure, ...] = field(default_factory=tuple)
