"""Real-time clock arithmetic: BCD decoding and conversion to epoch seconds."""

from __future__ import annotations

DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_DAY = 24 * 60 * 60


def bcd_to_bin(value: int) -> int:
    """Return the integer value of a BCD byte, e.g. 0x59 -> 59."""
    return (value & 0x0F) + (value >> 4) * 10


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def epoch_seconds(sec: int, min: int, hour: int, mday: int, mon: int, year: int) -> int:
    """Seconds since 1970 for clock fields with a two-digit YEAR.

    Years before 70 are taken to be in the 2000s.  Month lengths are
    summed for months 1 through MON inclusive, with one extra day after
    February when the year since 1970 is a multiple of four.
    """
    if not 0 <= mon <= 12:
        raise ValueError(f"month out of range: {mon}")
    if year < 70:
        year += 100
    year -= 70
    time = (year * 365 + _trunc_div(year - 1, 4)) * _DAY
    time += sum(DAYS_PER_MONTH[:mon]) * _DAY
    if mon > 2 and year % 4 == 0:
        time += _DAY
    time += (mday - 1) * _DAY
    time += hour * 60 * 60
    time += min * 60
    time += sec
    return time


def epoch_seconds_from_bcd(
    sec: int, min: int, hour: int, mday: int, mon: int, year: int
) -> int:
    """As epoch_seconds, for fields read from the clock in BCD."""
    return epoch_seconds(
        bcd_to_bin(sec),
        bcd_to_bin(min),
        bcd_to_bin(hour),
        bcd_to_bin(mday),
        bcd_to_bin(mon),
        bcd_to_bin(year),
    )