"""Stateless entry points for work and attendance minutes.

These are what the engine uses internally and what detail views call for
ad-hoc figures. Results are never negative; malformed times contribute zero.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..attendance.calculator import AttendanceMinutesCalculator
from ..breaks.catalog import BreakCatalog
from ..core.constants import DEFAULT_MERGE_GAP_MINUTES
from ..work_records.deduction import BreakDeduction, IntervalDeduction
from ..work_records.merger import IntervalMerger, SpanLike

_deduction = BreakDeduction()
_attendance = AttendanceMinutesCalculator()


def describe_work_sessions(
    sessions: Iterable[SpanLike],
    catalog: BreakCatalog,
    *,
    merge_gap_minutes: int = DEFAULT_MERGE_GAP_MINUTES,
) -> list[IntervalDeduction]:
    merged = IntervalMerger(merge_gap_minutes).merge(sessions)
    out: list[IntervalDeduction] = []
    for interval in merged:
        deduction = _deduction.deduct(interval, catalog)
        if deduction is not None:
            out.append(deduction)
    return out


def compute_work_minutes(
    sessions: Iterable[SpanLike],
    catalog: BreakCatalog,
    *,
    merge_gap_minutes: int = DEFAULT_MERGE_GAP_MINUTES,
) -> int:
    return sum(d.duration for d in describe_work_sessions(sessions, catalog, merge_gap_minutes=merge_gap_minutes))


def compute_attendance_minutes(
    clock_in: Optional[str],
    clock_out: Optional[str],
    catalog: BreakCatalog,
    ignore_before_0830: bool = True,
) -> int:
    return _attendance.compute(clock_in, clock_out, catalog, ignore_before_0830)
