from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import RawSession


class WorkRecordRepository(Protocol):
    def fetch_work_sessions(self, user_id: int, work_date: date, tz_name: str) -> Sequence[RawSession]:
        """Sessions whose start falls on `work_date` in the local zone `tz_name`."""

        raise NotImplementedError
