from __future__ import annotations

from typing import Optional

from ..core.constants import LAST_MINUTE_OF_DAY, MINUTES_PER_DAY
from ..core.exceptions import InvalidTimeFormat


def parse_time_of_day(value: Optional[str]) -> Optional[int]:
    """Parse "HH:MM" into minutes since midnight.

    A trailing seconds part ("08:30:00", as MySQL TIME renders) is ignored.
    Returns None for anything that is not a time of day in [00:00, 23:59].
    """

    if not value:
        return None

    parts = str(value).strip().split(":")
    if len(parts) < 2:
        return None

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None

    total = hours * 60 + minutes
    if total < 0 or total > LAST_MINUTE_OF_DAY:
        return None
    return total


def require_time_of_day(value: Optional[str], field_name: str) -> int:
    minutes = parse_time_of_day(value)
    if minutes is None:
        raise InvalidTimeFormat(f"{field_name} must be HH:MM (got {value!r})")
    return minutes


def normalize_end(start_min: int, end_min: int) -> int:
    """Shift an end that is earlier than its start onto the next day."""
    if end_min < start_min:
        return end_min + MINUTES_PER_DAY
    return end_min


def format_minutes(minutes: int) -> str:
    hours = (minutes // 60) % 24
    return f"{hours:02d}:{minutes % 60:02d}"


def overlap_minutes(a_start: int, a_end: int, b_start: int, b_end: int) -> int:
    start = max(a_start, b_start)
    end = min(a_end, b_end)
    return end - start if end > start else 0
