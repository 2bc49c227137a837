from __future__ import annotations

from typing import Optional

from ..breaks.catalog import BreakCatalog
from ..common.time_of_day import format_minutes, normalize_end, overlap_minutes, parse_time_of_day
from ..core.constants import ATTENDANCE_COUNT_START
from .model import AttendanceBreakdown

_COUNT_START = parse_time_of_day(ATTENDANCE_COUNT_START)


class AttendanceMinutesCalculator:
    """Net paid-attendance minutes for one clock-in/clock-out pair.

    Every active break window is subtracted once, the morning break included.
    With `ignore_before_0830` the clock-in is snapped up to 08:30 whether or
    not a morning break is configured.
    """

    def compute(
        self,
        clock_in: Optional[str],
        clock_out: Optional[str],
        catalog: BreakCatalog,
        ignore_before_0830: bool = True,
    ) -> int:
        return self.breakdown(clock_in, clock_out, catalog, ignore_before_0830).minutes

    def breakdown(
        self,
        clock_in: Optional[str],
        clock_out: Optional[str],
        catalog: BreakCatalog,
        ignore_before_0830: bool = True,
    ) -> AttendanceBreakdown:
        start = parse_time_of_day(clock_in) if clock_in else None
        end_raw = parse_time_of_day(clock_out) if clock_out else None
        if start is None or end_raw is None:
            return AttendanceBreakdown(
                clock_in=clock_in,
                clock_out=clock_out,
                counted_start=None,
                base_minutes=0,
                break_minutes=0,
                minutes=0,
            )

        # Rollover is judged against the recorded clock-in, before the snap.
        end = normalize_end(start, end_raw)

        snapped = False
        if ignore_before_0830 and start < _COUNT_START:
            start = _COUNT_START
            snapped = True

        base = max(0, end - start)
        break_total = sum(
            overlap_minutes(start, end, w.start, w.end_normalized) for w in catalog.active_windows()
        )
        return AttendanceBreakdown(
            clock_in=clock_in,
            clock_out=clock_out,
            counted_start=format_minutes(start),
            base_minutes=base,
            break_minutes=break_total,
            minutes=max(0, base - break_total),
            snapped_to_count_start=snapped,
        )
