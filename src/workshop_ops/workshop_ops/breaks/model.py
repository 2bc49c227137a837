from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.time_of_day import parse_time_of_day


@dataclass(frozen=True)
class BreakWindow:
    """Administrator-configured daily break, deducted from worked time."""

    name: str
    start_time: str
    end_time: str
    is_active: bool = True
    duration_minutes: int = 0
    break_id: Optional[int] = None

    @property
    def start_minutes(self) -> Optional[int]:
        return parse_time_of_day(self.start_time)

    @property
    def end_minutes(self) -> Optional[int]:
        return parse_time_of_day(self.end_time)

    @property
    def label(self) -> str:
        return f"{self.start_time} - {self.end_time}"
