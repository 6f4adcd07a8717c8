"""Date and time helpers used by the solar calculations."""

from __future__ import annotations

from datetime import datetime, time, timezone

_SECONDS_PER_DAY = 86400.0


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division that rounds toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def to_julian_date(moment: datetime) -> float:
    """Return the Julian date of a moment.

    A naive datetime is taken to be in UTC; an aware one is converted to UTC first.
    Fractions of a second are ignored.
    """
    if moment.tzinfo is not None and moment.utcoffset() is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)

    year, month, day = moment.year, moment.month, moment.day
    julian_day = float(
        367 * year
        - _trunc_div(7 * (year + _trunc_div(month + 9, 12)), 4)
        + _trunc_div(275 * month, 9)
        + day
        + 1721014
    )

    # The Julian day starts at 12:00 UTC.
    if moment.hour >= 12:
        hour_part = (moment.hour - 12) / 24.0
    else:
        hour_part = moment.hour / 24.0 - 0.5

    time_part = hour_part + moment.minute / 1440.0 + moment.second / _SECONDS_PER_DAY
    return julian_day + time_part


def day_fraction(moment: time | datetime) -> float:
    """Return the whole seconds elapsed since midnight as a fraction of a day."""
    seconds = moment.hour * 3600 + moment.minute * 60 + moment.second
    return seconds / _SECONDS_PER_DAY