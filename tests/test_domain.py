from datetime import datetime, time, timedelta, timezone

import pytest

from heliocron.domain import (
    Altitude,
    Coordinates,
    DayPart,
    Direction,
    EventTime,
    FixedElevationEvent,
    Latitude,
    Longitude,
    RawEventName,
    VariableElevationEvent,
    WaitAction,
    event_from_name,
)


def test_new_latitude():
    lat = Latitude(15.1234)
    assert lat == Latitude(15.1234)
    assert float(lat) == 15.1234


@pytest.mark.parametrize("value", [-90.0, -89.9999999999, -0.0, 0.0, 90.0])
def test_new_latitude_with_valid_values(value):
    assert float(Latitude(value)) == value


@pytest.mark.parametrize("value", [-180.0, -90.00000000001, 90.00000001, 100.0])
def test_new_latitude_with_invalid_values(value):
    with pytest.raises(ValueError, match="Latitude must be between"):
        Latitude(value)


@pytest.mark.parametrize("text", ["-90.0", "-89.9999999999", "-0.0", "0.0", "90.0"])
def test_parse_latitude_with_valid_values(text):
    assert float(Latitude.parse(text)) == float(text)


@pytest.mark.parametrize("text", ["-180.0", "-90.00000000001", "90.00000001", "100.0"])
def test_parse_latitude_with_invalid_values(text):
    with pytest.raises(ValueError, match="Latitude must be between"):
        Latitude.parse(text)


def test_parse_latitude_not_a_number():
    with pytest.raises(ValueError) as info:
        Latitude.parse("north")
    assert str(info.value) == (
        "Latitude must be between -90.0 and 90.0, inclusive. Found `north`."
    )


def test_new_longitude():
    lon = Longitude(-150.1234)
    assert lon == Longitude(-150.1234)
    assert float(lon) == -150.1234


@pytest.mark.parametrize("value", [-180.0, -90.0, -89.9999, -0.0, 0.0, 90.0, 180.0])
def test_new_longitude_with_valid_values(value):
    assert float(Longitude(value)) == value


@pytest.mark.parametrize("value", [-180.1, 180.01])
def test_new_longitude_with_invalid_values(value):
    with pytest.raises(ValueError, match="Longitude must be between"):
        Longitude(value)


@pytest.mark.parametrize(
    "text", ["-180.0", "-90.0", "-89.9999", "-0.0", "0.0", "90.0", "180.0"]
)
def test_parse_longitude_with_valid_values(text):
    assert float(Longitude.parse(text)) == float(text)


@pytest.mark.parametrize("text", ["-180.1", "180.01"])
def test_parse_longitude_with_invalid_values(text):
    with pytest.raises(ValueError, match="Longitude must be between"):
        Longitude.parse(text)


def test_new_coordinates():
    latitude = Latitude(10.0)
    longitude = Longitude(20.0)
    coords = Coordinates(latitude, longitude)
    assert coords == Coordinates(latitude=latitude, longitude=longitude)
    assert coords.to_dict() == {"latitude": 10.0, "longitude": 20.0}


def test_coordinates_validate_plain_floats():
    with pytest.raises(ValueError):
        Coordinates(95.0, 0.0)


def test_latitude_and_longitude_display():
    assert str(Latitude(51.4769)) == "51.4769"
    assert str(Latitude(51.0)) == "51"
    assert str(Longitude(-5.467)) == "-5.467"


def test_serialize_event_time():
    dt = datetime.fromisoformat("2022-06-11T12:00:00+01:00")
    assert EventTime(dt).to_json() == "2022-06-11T12:00:00+01:00"
    assert EventTime(None).to_json() is None


def test_display_event_time():
    dt = datetime.fromisoformat("2022-06-11T12:00:00+01:00")
    assert str(EventTime(dt)) == "2022-06-11 12:00:00 +01:00"
    assert str(EventTime(None)) == "Never"


def test_event_time_accessors():
    dt = datetime(2020, 3, 25, 6, 0, 7, tzinfo=timezone.utc)
    present = EventTime(dt)
    absent = EventTime()
    assert present.is_some() is True
    assert absent.is_some() is False
    assert present.time() == time(6, 0, 7)
    assert absent.time() is None


def test_display_event_time_negative_offset():
    dt = datetime(2022, 7, 29, 12, 0, 0, tzinfo=timezone(-timedelta(hours=9, minutes=30)))
    assert str(EventTime(dt)) == "2022-07-29 12:00:00 -09:30"


@pytest.mark.parametrize(
    ("angle", "expected"),
    [
        (-18.1, DayPart.NIGHT),
        (-18.0, DayPart.ASTRONOMICAL_TWILIGHT),
        (-12.0, DayPart.NAUTICAL_TWILIGHT),
        (-6.0, DayPart.CIVIL_TWILIGHT),
        (0.8, DayPart.CIVIL_TWILIGHT),
        (0.833, DayPart.DAY),
        (45.0, DayPart.DAY),
    ],
)
def test_day_part_from_elevation_angle(angle, expected):
    assert DayPart.from_elevation_angle(angle) is expected


def test_day_part_display_and_serialised_name():
    part = DayPart.from_elevation_angle(-15.0)
    assert str(part) == "Astronomical Twilight"
    assert part.value == "astronomical_twilight"
    assert str(DayPart.from_elevation_angle(-30.0)) == "Night"


@pytest.mark.parametrize("value", [-90.0, -6.3, 0.0, 6.3, 90.0])
def test_altitude_accepts_range(value):
    assert float(Altitude(value)) == value


@pytest.mark.parametrize("text", ["-90.1", "90.1"])
def test_altitude_rejects_out_of_range(text):
    with pytest.raises(ValueError, match="Expected a number between -90.0 and 90.0"):
        Altitude.parse(text)


def test_altitude_must_be_float():
    with pytest.raises(ValueError, match="Expected a number between -90.0 and 90.0"):
        Altitude.parse("not-a-float")


@pytest.mark.parametrize(
    ("name", "degrees", "direction"),
    [
        ("sunrise", 0.833, Direction.ASCENDING),
        ("sunset", 0.833, Direction.DESCENDING),
        ("civil_dawn", 6.0, Direction.ASCENDING),
        ("civil_dusk", 6.0, Direction.DESCENDING),
        ("nautical_dawn", 12.0, Direction.ASCENDING),
        ("nautical_dusk", 12.0, Direction.DESCENDING),
        ("astronomical_dawn", 18.0, Direction.ASCENDING),
        ("astronomical_dusk", 18.0, Direction.DESCENDING),
    ],
)
def test_event_from_fixed_name(name, degrees, direction):
    event = event_from_name(RawEventName(name))
    assert event == FixedElevationEvent(Altitude(degrees), direction)


def test_event_from_name_ignores_altitude_for_fixed_events():
    assert event_from_name("sunrise", 5.0) == event_from_name("sunrise")


def test_custom_events_use_altitude():
    assert event_from_name("custom_am", 8.5) == FixedElevationEvent(
        Altitude(8.5), Direction.ASCENDING
    )
    assert event_from_name("custom_pm", -6.3) == FixedElevationEvent(
        Altitude(-6.3), Direction.DESCENDING
    )


def test_custom_event_requires_altitude():
    with pytest.raises(ValueError, match="altitude"):
        event_from_name(RawEventName.CUSTOM_PM)


def test_solar_noon_is_variable():
    assert event_from_name("solar_noon") is VariableElevationEvent.SOLAR_NOON


def test_unknown_event_name():
    with pytest.raises(ValueError):
        event_from_name("midnight")


def test_wait_action_defaults():
    action = WaitAction(event_from_name("sunset"))
    assert action.offset == timedelta(0)
    assert action.run_missed_task is False