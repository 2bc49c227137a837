from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import structlog

from ..common.time_of_day import normalize_end, parse_time_of_day
from ..core.constants import MORNING_BREAK_END, MORNING_BREAK_START
from .model import BreakWindow

log = structlog.get_logger(__name__)

_MORNING_START = parse_time_of_day(MORNING_BREAK_START)
_MORNING_END = parse_time_of_day(MORNING_BREAK_END)


@dataclass(frozen=True)
class ActiveBreak:
    """An active break window with its times parsed to minutes of day."""

    name: str
    start: int
    end: int
    label: str

    @property
    def end_normalized(self) -> int:
        return normalize_end(self.start, self.end)

    @property
    def is_morning_break(self) -> bool:
        return self.start == _MORNING_START and self.end == _MORNING_END


class BreakCatalog:
    """Read-only snapshot of the break configuration for one evaluation.

    Build a new catalog per worker-day so admin edits apply on the next run.
    """

    def __init__(self, windows: Iterable[BreakWindow] = ()):
        active: list[ActiveBreak] = []
        for w in windows:
            if not w.is_active:
                continue
            start = w.start_minutes
            end = w.end_minutes
            if start is None or end is None:
                log.warning("break_window_skipped", name=w.name, start_time=w.start_time, end_time=w.end_time)
                continue
            active.append(ActiveBreak(name=w.name, start=start, end=end, label=w.label))
        self._active = tuple(active)

    @classmethod
    def empty(cls) -> "BreakCatalog":
        return cls(())

    def active_windows(self) -> list[ActiveBreak]:
        return list(self._active)

    def is_morning_break(self, window: ActiveBreak) -> bool:
        return window.is_morning_break

    def morning_break(self) -> Optional[ActiveBreak]:
        for w in self._active:
            if w.is_morning_break:
                return w
        return None

    @property
    def has_morning_break(self) -> bool:
        return self.morning_break() is not None

    def regular_windows(self) -> list[ActiveBreak]:
        """Active windows other than the morning break."""
        return [w for w in self._active if not w.is_morning_break]

    def __len__(self) -> int:
        return len(self._active)
