from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import structlog

from ..breaks.catalog import ActiveBreak, BreakCatalog
from ..common.time_of_day import normalize_end, overlap_minutes, parse_time_of_day
from ..core.constants import MINUTES_PER_DAY, MORNING_BREAK_END, MORNING_BREAK_START
from .model import MergedInterval

log = structlog.get_logger(__name__)

_MORNING_START = parse_time_of_day(MORNING_BREAK_START)
_MORNING_END = parse_time_of_day(MORNING_BREAK_END)


@dataclass(frozen=True)
class BreakOverlap:
    name: str
    break_time: str
    minutes: int


@dataclass(frozen=True)
class IntervalDeduction:
    start: str
    end: str
    counted_start_minutes: int
    end_minutes: int
    base_minutes: int
    break_minutes: int
    duration: int
    morning_shift_applied: bool = False
    overlaps: tuple[BreakOverlap, ...] = field(default_factory=tuple)

    @property
    def crosses_midnight(self) -> bool:
        return self.end_minutes > MINUTES_PER_DAY


def break_overlap(start: int, end: int, window: ActiveBreak) -> int:
    """Minutes of [start, end) covered by the window.

    When the work range runs past midnight, the window's next-day occurrence
    is counted too.
    """

    w_start = window.start
    w_end = window.end_normalized
    total = overlap_minutes(start, end, w_start, w_end)
    if end > MINUTES_PER_DAY:
        total += overlap_minutes(start, end, w_start + MINUTES_PER_DAY, w_end + MINUTES_PER_DAY)
    return total


class BreakDeduction:
    """Net worked minutes of one merged interval after break windows."""

    def deduct(self, interval: MergedInterval, catalog: BreakCatalog) -> Optional[IntervalDeduction]:
        start = parse_time_of_day(interval.start)
        end_raw = parse_time_of_day(interval.end)
        if start is None or end_raw is None:
            log.warning("interval_skipped", start=interval.start, end=interval.end)
            return None
        end = normalize_end(start, end_raw)

        # Work logged before 06:00 is overnight carry-over; count from 08:30.
        # The morning break is consumed by this shift and never subtracted again.
        shifted = False
        if catalog.has_morning_break and start < _MORNING_START:
            start = _MORNING_END
            shifted = True

        base = max(0, end - start)

        overlaps: list[BreakOverlap] = []
        for window in catalog.regular_windows():
            minutes = break_overlap(start, end, window)
            if minutes > 0:
                overlaps.append(BreakOverlap(name=window.name, break_time=window.label, minutes=minutes))

        break_total = sum(o.minutes for o in overlaps)
        return IntervalDeduction(
            start=interval.start,
            end=interval.end,
            counted_start_minutes=start,
            end_minutes=end,
            base_minutes=base,
            break_minutes=break_total,
            duration=max(0, base - break_total),
            morning_shift_applied=shifted,
            overlaps=tuple(overlaps),
        )
