import pytest

from src.workshop_ops.workshop_ops.breaks.catalog import BreakCatalog
from src.workshop_ops.workshop_ops.breaks.model import BreakWindow
from src.workshop_ops.workshop_ops.work_records.deduction import BreakDeduction
from src.workshop_ops.workshop_ops.work_records.model import MergedInterval


def _catalog(*windows):
    return BreakCatalog([BreakWindow(name=n, start_time=s, end_time=e) for n, s, e in windows])


MORNING = ("Morning", "06:00", "08:30")
LUNCH = ("Lunch", "12:00", "13:00")


def test_lunch_is_subtracted_from_a_full_day():
    result = BreakDeduction().deduct(MergedInterval("09:00", "18:00"), _catalog(LUNCH))

    assert result.base_minutes == 540
    assert result.break_minutes == 60
    assert result.duration == 480
    assert [(o.name, o.minutes) for o in result.overlaps] == [("Lunch", 60)]


def test_early_start_is_shifted_to_0830_when_morning_break_exists():
    result = BreakDeduction().deduct(MergedInterval("05:00", "17:00"), _catalog(MORNING))

    assert result.morning_shift_applied
    assert result.counted_start_minutes == 510
    assert result.break_minutes == 0
    assert result.duration == 510


def test_morning_break_is_never_subtracted_as_a_regular_window():
    result = BreakDeduction().deduct(MergedInterval("07:00", "17:00"), _catalog(MORNING, LUNCH))

    assert not result.morning_shift_applied
    assert result.duration == 600 - 60
    assert [o.name for o in result.overlaps] == ["Lunch"]


def test_no_shift_without_the_exact_morning_break():
    result = BreakDeduction().deduct(MergedInterval("05:00", "17:00"), _catalog(("Early", "06:00", "08:00")))

    assert not result.morning_shift_applied
    assert result.duration == 720 - 120


def test_shift_past_the_end_gives_zero():
    result = BreakDeduction().deduct(MergedInterval("05:00", "08:00"), _catalog(MORNING))

    assert result.duration == 0


@pytest.mark.parametrize(
    "windows,expected",
    [
        ((), 240),
        ((("Night", "23:00", "23:30"),), 210),
        ((("Late", "01:00", "01:30"),), 210),
    ],
)
def test_midnight_crossing_interval(windows, expected):
    result = BreakDeduction().deduct(MergedInterval("22:00", "02:00"), _catalog(*windows))

    assert result.crosses_midnight
    assert result.duration == expected


def test_break_spanning_midnight_is_subtracted_once():
    result = BreakDeduction().deduct(MergedInterval("22:00", "02:00"), _catalog(("Night", "23:30", "00:30")))

    assert result.duration == 240 - 60


def test_unparseable_interval_contributes_nothing():
    assert BreakDeduction().deduct(MergedInterval("bad", "10:00"), _catalog(LUNCH)) is None


def test_duration_is_never_negative():
    result = BreakDeduction().deduct(MergedInterval("12:10", "12:40"), _catalog(LUNCH))

    assert result.duration == 0
