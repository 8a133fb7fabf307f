import pytest

from sectorfs.rtc import bcd_to_bin, epoch_seconds, epoch_seconds_from_bcd

DAY = 24 * 60 * 60


def test_bcd_examples():
    assert bcd_to_bin(0x59) == 59
    assert bcd_to_bin(0x23) == 23
    assert bcd_to_bin(0x00) == 0


def test_bcd_round_trip():
    for n in range(100):
        assert bcd_to_bin(((n // 10) << 4) | (n % 10)) == n


def test_field_increments():
    base = epoch_seconds(10, 20, 5, 10, 6, 95)
    assert epoch_seconds(11, 20, 5, 10, 6, 95) - base == 1
    assert epoch_seconds(10, 21, 5, 10, 6, 95) - base == 60
    assert epoch_seconds(10, 20, 6, 10, 6, 95) - base == 3600
    assert epoch_seconds(10, 20, 5, 11, 6, 95) - base == DAY


def test_two_digit_years_wrap_into_2000s():
    assert epoch_seconds(0, 0, 0, 1, 1, 0) > epoch_seconds(0, 0, 0, 1, 1, 99)
    assert epoch_seconds(0, 0, 0, 1, 1, 5) > epoch_seconds(0, 0, 0, 1, 1, 4)


def test_leap_year_adds_a_day_after_february():
    leap = epoch_seconds(0, 0, 0, 1, 3, 74) - epoch_seconds(0, 0, 0, 1, 2, 74)
    plain = epoch_seconds(0, 0, 0, 1, 3, 75) - epoch_seconds(0, 0, 0, 1, 2, 75)
    assert leap - plain == DAY


def test_from_bcd_matches_decoded_fields():
    assert epoch_seconds_from_bcd(0x59, 0x30, 0x23, 0x15, 0x08, 0x04) == epoch_seconds(
        59, 30, 23, 15, 8, 4
    )


def test_month_out_of_range():
    with pytest.raises(ValueError):
        epoch_seconds(0, 0, 0, 1, 13, 80)