from datetime import date, datetime

import pytz

from src.workshop_ops.workshop_ops.common.datetime_utils import (
    local_day_bounds_utc,
    previous_days,
    recent_business_days,
    to_local,
    to_wall_clock,
)


def test_naive_instants_are_treated_as_utc():
    assert to_wall_clock(datetime(2025, 3, 10, 0, 30), "Asia/Tokyo") == "09:30"


def test_aware_instants_keep_their_zone():
    aware = pytz.timezone("Asia/Tokyo").localize(datetime(2025, 3, 10, 9, 30))
    assert to_local(aware, "UTC").hour == 0


def test_local_day_bounds_cover_the_tokyo_calendar_day():
    start, end = local_day_bounds_utc(date(2025, 3, 10), "Asia/Tokyo")

    assert start == datetime(2025, 3, 9, 15, 0)
    assert end == datetime(2025, 3, 10, 15, 0)
    assert start.tzinfo is None


def test_previous_days_are_newest_first_and_exclude_today():
    assert previous_days(date(2025, 3, 10), 4) == [
        date(2025, 3, 9),
        date(2025, 3, 8),
        date(2025, 3, 7),
        date(2025, 3, 6),
    ]


def test_recent_business_days_skip_weekends():
    # 2025-03-10 is a Monday.
    assert recent_business_days(date(2025, 3, 10), 3) == [
        date(2025, 3, 7),
        date(2025, 3, 6),
        date(2025, 3, 5),
    ]
