from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_wall_clock


@dataclass(frozen=True)
class RawSession:
    """One work-session row as stored (absolute instants, UTC when naive)."""

    record_id: int
    user_id: int
    start_instant: datetime
    end_instant: Optional[datetime]
    vehicle_number: Optional[str] = None
    process_name: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.end_instant is None


@dataclass(frozen=True)
class SessionSpan:
    """A session reduced to day-local wall-clock "HH:MM" strings."""

    start: str
    end: str
    record_id: Optional[int] = None


@dataclass(frozen=True)
class MergedInterval:
    start: str
    end: str


def to_session_span(session: RawSession, tz_name: str, now: datetime) -> SessionSpan:
    """Convert stored instants to local wall-clock once, right after fetch.

    Open sessions end at `now`.
    """

    end = session.end_instant if session.end_instant is not None else now
    return SessionSpan(
        start=to_wall_clock(session.start_instant, tz_name),
        end=to_wall_clock(end, tz_name),
        record_id=session.record_id,
    )
