from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

import structlog

from ..common.time_of_day import format_minutes, normalize_end, parse_time_of_day
from ..core.constants import DEFAULT_MERGE_GAP_MINUTES
from .model import MergedInterval, SessionSpan

log = structlog.get_logger(__name__)

SpanLike = Union[SessionSpan, Sequence[str]]


def as_span(value: SpanLike) -> SessionSpan:
    if isinstance(value, SessionSpan):
        return value
    start, end = value
    return SessionSpan(start=start, end=end)


@dataclass
class _Block:
    start: int
    end: int


class IntervalMerger:
    """Coalesce one worker-day's sessions into disjoint wall-clock blocks.

    Two sessions merge when they overlap or the gap between them is at most
    `merge_gap_minutes` (a stop at 12:00 and a start at 12:01 are one block).
    Each session is merged into the first block it touches; the output is not
    guaranteed to be sorted.
    """

    def __init__(self, merge_gap_minutes: int = DEFAULT_MERGE_GAP_MINUTES):
        self._gap = int(merge_gap_minutes)

    def merge(self, sessions: Iterable[SpanLike]) -> list[MergedInterval]:
        spans = sorted((as_span(s) for s in sessions), key=lambda s: s.start or "")

        blocks: list[_Block] = []
        for span in spans:
            start = parse_time_of_day(span.start)
            end_raw = parse_time_of_day(span.end)
            if start is None or end_raw is None:
                log.warning("session_skipped", record_id=span.record_id, start=span.start, end=span.end)
                continue
            end = normalize_end(start, end_raw)

            for block in blocks:
                if end < block.start - self._gap or start > block.end + self._gap:
                    continue
                block.start = min(start, block.start)
                block.end = max(end, block.end)
                break
            else:
                blocks.append(_Block(start=start, end=end))

        return [MergedInterval(start=format_minutes(b.start), end=format_minutes(b.end)) for b in blocks]
