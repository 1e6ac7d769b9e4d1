from datetime import datetime, time, timezone

from src.timeclock.timeclock.shifts.model import Shift
from src.timeclock.timeclock.shifts.resolver import resolve_shift, shift_contains

DAY = Shift(shift_id=1, shift_name="Day", start_time=time(8, 0), end_time=time(16, 0))
NIGHT = Shift(shift_id=2, shift_name="Night", start_time=time(22, 0), end_time=time(6, 0))


def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2026, 2, 2, hour, minute, second, tzinfo=timezone.utc)


def test_same_day_window_is_half_open():
    assert resolve_shift(at(8, 0), [NIGHT, DAY]) == DAY
    assert resolve_shift(at(15, 59, 59), [NIGHT, DAY]) == DAY
    assert not shift_contains(DAY, 16 * 60)


def test_overnight_window_matches_both_sides_of_midnight():
    assert resolve_shift(at(23, 30), [DAY, NIGHT]) == NIGHT
    assert resolve_shift(at(2, 0), [DAY, NIGHT]) == NIGHT
    assert resolve_shift(at(22, 0), [DAY, NIGHT]) == NIGHT
    assert NIGHT.wraps_midnight and not DAY.wraps_midnight


def test_overnight_window_does_not_match_midday():
    assert not shift_contains(NIGHT, 12 * 60)
    assert resolve_shift(at(12, 0), [NIGHT, DAY]) == DAY


def test_first_match_in_list_order_wins():
    overlapping = Shift(shift_id=3, shift_name="Early", start_time=time(7, 0), end_time=time(12, 0))
    assert resolve_shift(at(9, 0), [overlapping, DAY]) == overlapping
    assert resolve_shift(at(9, 0), [DAY, overlapping]) == DAY


def test_no_match_falls_back_to_first_configured_shift():
    # 17:00 is outside both windows
    assert resolve_shift(at(17, 0), [NIGHT, DAY]) == NIGHT
    assert resolve_shift(at(17, 0), [DAY, NIGHT]) == DAY


def test_empty_configuration_resolves_to_none():
    assert resolve_shift(at(9, 0), []) is None


def test_equal_start_and_end_covers_whole_day():
    all_day = Shift(shift_id=4, shift_name="Around the clock", start_time=time(0, 0), end_time=time(0, 0))
    assert shift_contains(all_day, 0)
    assert shift_contains(all_day, 13 * 60)
