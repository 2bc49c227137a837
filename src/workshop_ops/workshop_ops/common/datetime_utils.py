from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytz


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    return datetime.now(pytz.UTC)


def to_local(dt: datetime, tz_name: str) -> datetime:
    """Convert a stored instant to the local zone.

    Naive values are treated as UTC, which is how MySQL TIMESTAMP columns come back.
    """

    if dt.tzinfo is None:
        dt = pytz.UTC.localize(dt)
    return dt.astimezone(pytz.timezone(tz_name))


def to_wall_clock(dt: datetime, tz_name: str) -> str:
    return to_local(dt, tz_name).strftime("%H:%M")


def local_day_bounds_utc(work_date: date, tz_name: str) -> tuple[datetime, datetime]:
    """UTC [start, end) covering one local calendar day, as naive datetimes."""

    tz = pytz.timezone(tz_name)
    start_local = tz.localize(datetime.combine(work_date, time.min))
    end_local = tz.localize(datetime.combine(work_date + timedelta(days=1), time.min))
    return (
        start_local.astimezone(pytz.UTC).replace(tzinfo=None),
        end_local.astimezone(pytz.UTC).replace(tzinfo=None),
    )


def previous_days(today: date, count: int) -> list[date]:
    """The `count` calendar days before today, newest first."""
    return [today - timedelta(days=i) for i in range(1, count + 1)]


def recent_business_days(today: date, count: int) -> list[date]:
    """The last `count` weekdays before today, newest first."""
    out: list[date] = []
    current = today - timedelta(days=1)
    while len(out) < count:
        if current.weekday() < 5:
            out.append(current)
        current -= timedelta(days=1)
    return out
