"""Domain types: coordinates, altitudes, solar events and event times."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal

_ALTITUDE_MESSAGE = "Expected a number between -90.0 and 90.0. Found '{}'"
_LATITUDE_MESSAGE = "Latitude must be between -90.0 and 90.0, inclusive. Found `{}`."
_LONGITUDE_NEW_MESSAGE = (
    "Longitude must be between -180.0 and 180.0, inclusive. Found '{}'."
)
_LONGITUDE_PARSE_MESSAGE = (
    "Longitude must be between -180.0 and 180.0, inclusive. Found `{}`."
)


def _format_float(value: float) -> str:
    """Render a float in its shortest exact form, without an exponent."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        text = str(int(value))
        if text == "0" and math.copysign(1.0, value) < 0:
            return "-0"
        return text
    return format(Decimal(repr(value)), "f")


def _parse_float(text: str) -> float:
    """Parse a decimal number strictly, raising ValueError with a short reason."""
    if not text:
        raise ValueError("cannot parse float from empty string")
    if text != text.strip() or "_" in text:
        raise ValueError("invalid float literal")
    try:
        return float(text)
    except ValueError:
        raise ValueError("invalid float literal") from None


def _format_offset(offset: timedelta) -> str:
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, rest = divmod(abs(total), 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}"
    if seconds:
        text += f":{seconds:02d}"
    return text


def _format_datetime(moment: datetime) -> str:
    text = moment.strftime("%Y-%m-%d %H:%M:%S")
    if moment.microsecond:
        if moment.microsecond % 1000 == 0:
            text += f".{moment.microsecond // 1000:03d}"
        else:
            text += f".{moment.microsecond:06d}"
    offset = moment.utcoffset()
    if offset is not None:
        text += " " + _format_offset(offset)
    return text


class DayPart(enum.Enum):
    """The parts of a day, named by the elevation of the Sun."""

    DAY = "day"
    CIVIL_TWILIGHT = "civil_twilight"
    NAUTICAL_TWILIGHT = "nautical_twilight"
    ASTRONOMICAL_TWILIGHT = "astronomical_twilight"
    NIGHT = "night"

    @classmethod
    def from_elevation_angle(cls, angle: float) -> DayPart:
        if angle < -18.0:
            return cls.NIGHT
        if angle < -12.0:
            return cls.ASTRONOMICAL_TWILIGHT
        if angle < -6.0:
            return cls.NAUTICAL_TWILIGHT
        if angle < 0.833:
            return cls.CIVIL_TWILIGHT
        return cls.DAY

    def __str__(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class EventTime:
    """The moment an event happens, or None when it does not happen that day."""

    moment: datetime | None = None

    def is_some(self) -> bool:
        return self.moment is not None

    def time(self) -> time | None:
        return None if self.moment is None else self.moment.time()

    def to_json(self) -> str | None:
        return None if self.moment is None else self.moment.isoformat()

    def __str__(self) -> str:
        return "Never" if self.moment is None else _format_datetime(self.moment)


class Altitude(float):
    """Degrees of the Sun's centre below the horizon, from -90.0 to 90.0."""

    def __new__(cls, value: float) -> Altitude:
        number = float(value)
        if not -90.0 <= number <= 90.0:
            raise ValueError(_ALTITUDE_MESSAGE.format(_format_float(number)))
        return super().__new__(cls, number)

    @classmethod
    def parse(cls, text: str) -> Altitude:
        try:
            number = _parse_float(text)
        except ValueError as exc:
            raise ValueError(_ALTITUDE_MESSAGE.format(exc)) from None
        return cls(number)

    def __str__(self) -> str:
        return _format_float(self)

    def __repr__(self) -> str:
        return f"Altitude({float(self)!r})"


class Latitude(float):
    """A latitude in decimal degrees; positive to the north."""

    def __new__(cls, value: float) -> Latitude:
        number = float(value)
        if not -90.0 <= number <= 90.0:
            raise ValueError(_LATITUDE_MESSAGE.format(_format_float(number)))
        return super().__new__(cls, number)

    @classmethod
    def parse(cls, text: str) -> Latitude:
        try:
            number = _parse_float(text)
        except ValueError:
            raise ValueError(_LATITUDE_MESSAGE.format(text)) from None
        return cls(number)

    def __str__(self) -> str:
        return _format_float(self)

    def __repr__(self) -> str:
        return f"Latitude({float(self)!r})"


class Longitude(float):
    """A longitude in decimal degrees; positive to the east."""

    def __new__(cls, value: float) -> Longitude:
        number = float(value)
        if not -180.0 <= number <= 180.0:
            raise ValueError(_LONGITUDE_NEW_MESSAGE.format(_format_float(number)))
        return super().__new__(cls, number)

    @classmethod
    def parse(cls, text: str) -> Longitude:
        try:
            number = _parse_float(text)
        except ValueError:
            raise ValueError(_LONGITUDE_PARSE_MESSAGE.format(text)) from None
        return cls(number)

    def __str__(self) -> str:
        return _format_float(self)

    def __repr__(self) -> str:
        return f"Longitude({float(self)!r})"


@dataclass(frozen=True)
class Coordinates:
    """A position on the map."""

    latitude: Latitude
    longitude: Longitude

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude", Latitude(self.latitude))
        object.__setattr__(self, "longitude", Longitude(self.longitude))

    def to_dict(self) -> dict[str, float]:
        return {"latitude": float(self.latitude), "longitude": float(self.longitude)}


class RawEventName(enum.Enum):
    """Event names accepted on the command line."""

    SUNRISE = "sunrise"
    SUNSET = "sunset"
    CIVIL_DAWN = "civil_dawn"
    CIVIL_DUSK = "civil_dusk"
    NAUTICAL_DAWN = "nautical_dawn"
    NAUTICAL_DUSK = "nautical_dusk"
    ASTRONOMICAL_DAWN = "astronomical_dawn"
    ASTRONOMICAL_DUSK = "astronomical_dusk"
    CUSTOM_AM = "custom_am"
    CUSTOM_PM = "custom_pm"
    SOLAR_NOON = "solar_noon"


class Direction(enum.Enum):
    """Whether the Sun is rising or setting."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class FixedElevationEvent:
    """An event that happens when the Sun reaches a set elevation."""

    degrees_below_horizon: Altitude
    solar_direction: Direction

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "degrees_below_horizon", Altitude(self.degrees_below_horizon)
        )


class VariableElevationEvent(enum.Enum):
    """Events whose solar elevation varies with date and place."""

    SOLAR_NOON = "solar_noon"


Event = FixedElevationEvent | VariableElevationEvent

_FIXED_EVENTS = {
    RawEventName.SUNRISE: (0.833, Direction.ASCENDING),
    RawEventName.SUNSET: (0.833, Direction.DESCENDING),
    RawEventName.CIVIL_DAWN: (6.0, Direction.ASCENDING),
    RawEventName.CIVIL_DUSK: (6.0, Direction.DESCENDING),
    RawEventName.NAUTICAL_DAWN: (12.0, Direction.ASCENDING),
    RawEventName.NAUTICAL_DUSK: (12.0, Direction.DESCENDING),
    RawEventName.ASTRONOMICAL_DAWN: (18.0, Direction.ASCENDING),
    RawEventName.ASTRONOMICAL_DUSK: (18.0, Direction.DESCENDING),
}

_CUSTOM_EVENTS = {
    RawEventName.CUSTOM_AM: Direction.ASCENDING,
    RawEventName.CUSTOM_PM: Direction.DESCENDING,
}


def event_from_name(
    name: RawEventName | str, altitude: float | None = None
) -> Event:
    """Build the event for a name; custom events need an altitude, others ignore it."""
    name = RawEventName(name)
    if name is RawEventName.SOLAR_NOON:
        return VariableElevationEvent.SOLAR_NOON
    if name in _CUSTOM_EVENTS:
        if altitude is None:
            raise ValueError(f"An altitude is required for the '{name.value}' event")
        return FixedElevationEvent(Altitude(altitude), _CUSTOM_EVENTS[name])
    degrees, direction = _FIXED_EVENTS[name]
    return FixedElevationEvent(Altitude(degrees), direction)


@dataclass(frozen=True)
class ReportAction:
    """Print a full report for the day."""

    json: bool = False


@dataclass(frozen=True)
class WaitAction:
    """Sleep until an event, shifted by an offset."""

    event: Event
    offset: timedelta = timedelta(0)
    run_missed_task: bool = False


@dataclass(frozen=True)
class PollAction:
    """Show the Sun's current position."""

    watch: bool = False
    json: bool = False