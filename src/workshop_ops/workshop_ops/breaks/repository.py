from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import BreakWindow


class BreakRepository(Protocol):
    def fetch_active_break_windows(self) -> Sequence[BreakWindow]:
        raise NotImplementedError

    def list_all(self) -> Sequence[BreakWindow]:
        raise NotImplementedError

    def get_by_id(self, break_id: int) -> Optional[BreakWindow]:
        raise NotImplementedError

    def create(self, *, name: str, start_time: str, end_time: str, duration_minutes: int, is_active: bool) -> int:
        raise NotImplementedError

    def update(self, *, break_id: int, fields: dict) -> bool:
        """Update only the given columns (name, start_time, end_time, duration_minutes, is_active)."""

        raise NotImplementedError

    def delete(self, *, break_id: int) -> bool:
        raise NotImplementedError
