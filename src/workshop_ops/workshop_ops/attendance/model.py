from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class AttendanceRecord:
    """One clock-in/clock-out pair for a worker-day ("HH:MM" wall clock)."""

    attendance_id: int
    user_id: int
    work_date: date
    clock_in: Optional[str]
    clock_out: Optional[str]
    stored_work_minutes: Optional[int] = None


@dataclass(frozen=True)
class ScanCandidate:
    """A worker-day that has attendance and is eligible for a scan."""

    user_id: int
    user_name: str
    role: Role
    work_date: date


@dataclass(frozen=True)
class AttendanceBreakdown:
    clock_in: Optional[str]
    clock_out: Optional[str]
    counted_start: Optional[str]
    base_minutes: int
    break_minutes: int
    minutes: int
    snapped_to_count_start: bool = False


@dataclass(frozen=True)
class RecalculationSummary:
    total: int
    updated: int
    errors: int
    error_details: tuple[str, ...] = field(default_factory=tuple)
