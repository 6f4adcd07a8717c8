from datetime import datetime, timedelta, timezone

import pytest

from heliocron.calc import SolarCalculations, offset_to_decimal_float
from heliocron.domain import (
    Coordinates,
    EventTime,
    Latitude,
    Longitude,
    RawEventName,
    VariableElevationEvent,
    event_from_name,
)


def _tz(hours=0.0):
    return timezone(timedelta(hours=hours))


def _coords(lat, lon):
    return Coordinates(Latitude(lat), Longitude(lon))


def _calcs(iso, lat, lon):
    return SolarCalculations(datetime.fromisoformat(iso), _coords(lat, lon))


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(seconds=3600), 1.0),
        (timedelta(seconds=-3600), -1.0),
        (timedelta(seconds=-36000), -10.0),
        (timedelta(seconds=int(3600.0 * 10.5)), 10.5),
    ],
)
def test_offset_to_decimal_float(offset, expected):
    assert offset_to_decimal_float(offset) == expected
    assert offset_to_decimal_float(timezone(offset)) == expected


def test_midday_calcs_zero_offset():
    date = datetime(2022, 7, 29, 12, 0, 0, tzinfo=_tz(0))
    calcs = SolarCalculations(date, _coords(56.8197, -5.1047))
    assert calcs.solar_noon_fraction == 0.5186937689277599


def test_midday_calcs_small_offset():
    date = datetime(2022, 7, 29, 12, 0, 0, tzinfo=_tz(1))
    calcs = SolarCalculations(date, _coords(56.8197, -5.1047))
    assert calcs.solar_noon_fraction == 0.5603613849259489


def test_midday_calcs_large_pos_offset():
    date = datetime(2022, 7, 29, 12, 0, 0, tzinfo=_tz(11))
    calcs = SolarCalculations(date, _coords(-37.0321, 175.122))
    assert calcs.solar_noon_fraction == 0.4764071517220478


def test_midday_calcs_large_neg_offset():
    tz = timezone(-timedelta(seconds=int(3600.0 * 9.5)))
    date = datetime(2022, 7, 29, 12, 0, 0, tzinfo=tz)
    calcs = SolarCalculations(date, _coords(-9.3968, -140.0777))
    assert calcs.solar_noon_fraction == 0.4977758080863915


@pytest.mark.parametrize(
    "expected, fraction",
    [
        ("2020-03-26 12:00:00 +00:00", 1.5),
        ("2020-03-24 12:00:00 +00:00", -0.5),
    ],
)
def test_day_fraction_to_time_underoverflow(expected, fraction):
    calcs = _calcs("2020-03-25T12:00:00+00:00", 0.0, 0.0)
    assert str(EventTime(calcs.day_fraction_to_datetime(fraction))) == expected


@pytest.mark.parametrize(
    "expected, fraction",
    [
        ("2020-03-25 00:00:00 +00:00", 0.0),
        ("2020-03-25 12:00:00 +00:00", 0.5),
        ("2020-03-25 23:59:59 +00:00", 0.99999),
        ("2020-03-25 01:23:45 +00:00", 0.05816),
        ("2020-03-25 23:42:12 +00:00", 0.987639),
    ],
)
def test_day_fraction_to_time(expected, fraction):
    calcs = _calcs("2020-03-25T12:00:00+00:00", 0.0, 0.0)
    assert str(EventTime(calcs.day_fraction_to_datetime(fraction))) == expected


def test_day_length():
    calcs = _calcs("2020-03-25T12:00:00+00:00", 51.4769, -0.0005)
    assert int(calcs.day_length().total_seconds()) == 45113


def test_day_length_24_hour_night():
    calcs = _calcs("2020-12-25T12:00:00+00:00", 70.67299, 23.67165)
    assert int(calcs.day_length().total_seconds()) == 0


def test_day_length_24_hour_day():
    calcs = _calcs("2020-06-25T12:00:00+00:00", 70.67299, 23.67165)
    assert int(calcs.day_length().total_seconds()) == 86400


def test_event_times_match_known_values():
    calcs = _calcs("2020-03-25T12:00:00+00:00", 55.9533, -3.1883)
    sunrise = calcs.event_time(event_from_name(RawEventName.SUNRISE))
    sunset = calcs.event_time(event_from_name(RawEventName.SUNSET))
    noon = calcs.event_time(VariableElevationEvent.SOLAR_NOON)
    assert str(sunrise.time()) == "06:00:07"
    assert str(sunset.time()) == "18:36:59"
    assert str(noon.time()) == "12:18:33"


def test_non_occurring_event_is_none():
    calcs = _calcs("2020-06-21T12:00:00+01:00", 55.9533, -3.1883)
    dusk = calcs.event_time(event_from_name(RawEventName.ASTRONOMICAL_DUSK))
    assert dusk.moment is None
    assert str(dusk) == "Never"


def test_custom_events_order_around_noon():
    calcs = _calcs("2020-03-25T12:00:00+00:00", 51.4769, -0.0005)
    am = calcs.event_time(event_from_name(RawEventName.CUSTOM_AM, 8.5)).moment
    pm = calcs.event_time(event_from_name(RawEventName.CUSTOM_PM, 8.5)).moment
    noon = calcs.solar_noon().moment
    assert am < noon < pm


def test_solar_noon_always_exists_at_poles():
    calcs = _calcs("2020-06-21T12:00:00+02:00", 78.22, 15.635)
    assert str(calcs.solar_noon().time()) == "12:59:21"
    assert calcs.day_length() == timedelta(hours=24)


def test_refresh_keeps_coordinates():
    calcs = _calcs("2020-03-25T12:00:00+00:00", 55.9533, -3.1883)
    later = datetime(2020, 3, 25, 18, 0, 0, tzinfo=_tz(0))
    refreshed = calcs.refresh(later)
    assert refreshed.coordinates == calcs.coordinates
    assert refreshed.date == later
    assert refreshed.solar_elevation() < calcs.solar_elevation()


def test_elevation_higher_at_noon_than_midnight():
    noon = _calcs("2020-03-25T12:00:00+00:00", 51.4769, -0.0005)
    midnight = _calcs("2020-03-25T00:00:00+00:00", 51.4769, -0.0005)
    assert noon.solar_elevation() > 0.0 > midnight.solar_elevation()
    assert noon.max_solar_elevation() >= noon.solar_elevation() - 0.01


@pytest.mark.parametrize("hour", [0, 6, 9, 12, 15, 18, 23])
def test_azimuth_within_circle(hour):
    date = datetime(2020, 3, 25, hour, 0, 0, tzinfo=_tz(0))
    calcs = SolarCalculations(date, _coords(51.4769, -0.0005))
    assert 0.0 <= calcs.azimuth_angle() <= 360.0


def test_naive_date_is_rejected():
    with pytest.raises(ValueError):
        SolarCalculations(datetime(2020, 3, 25, 12), _coords(0.0, 0.0))