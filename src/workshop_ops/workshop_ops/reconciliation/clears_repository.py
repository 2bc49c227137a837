from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import IssueClear


class IssueClearRepository(Protocol):
    def fetch_cleared_exclusions(self) -> set[tuple[int, date]]:
        """Every cleared (user_id, work_date) pair."""

        raise NotImplementedError

    def exists(self, *, user_id: int, work_date: date) -> bool:
        raise NotImplementedError

    def create(self, *, user_id: int, work_date: date, cleared_by: int) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[IssueClear]:
        raise NotImplementedError
