"""Daily solar reports and real-time solar position reports."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from heliocron.calc import SolarCalculations
from heliocron.domain import Coordinates, DayPart, EventTime, RawEventName, event_from_name


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def _trunc_rem(numerator: int, denominator: int) -> int:
    return numerator - denominator * _trunc_div(numerator, denominator)


def _whole_seconds(duration: timedelta) -> int:
    """Whole seconds in a duration, truncated toward zero."""
    microseconds = (duration.days * 86400 + duration.seconds) * 1_000_000
    microseconds += duration.microseconds
    return _trunc_div(microseconds, 1_000_000)


def _offset_text(moment: datetime) -> str:
    offset = moment.utcoffset() or timedelta(0)
    total = _whole_seconds(offset)
    sign = "+" if total >= 0 else "-"
    hours, rest = divmod(abs(total), 3600)
    return f"{sign}{hours:02d}:{rest // 60:02d}"


def _rfc3339(moment: datetime) -> str:
    """RFC 3339 text, with fractional seconds only when present."""
    if moment.microsecond == 0:
        return moment.isoformat(timespec="seconds")
    if moment.microsecond % 1000 == 0:
        return moment.isoformat(timespec="milliseconds")
    return moment.isoformat(timespec="microseconds")


def _json_float(value: float) -> float | None:
    return value if math.isfinite(value) else None


def day_length_hms(day_length: timedelta) -> str:
    """Render a duration as 'Hh Mm Ss'."""
    seconds = _whole_seconds(day_length)
    hours = _trunc_div(_trunc_div(seconds, 60), 60)
    minutes = _trunc_rem(_trunc_div(seconds, 60), 60)
    remainder = _trunc_rem(seconds, 60)
    return f"{hours}h {minutes}m {remainder}s"


@dataclass(frozen=True)
class Report:
    """Sunrise, sunset, twilight and related times for one day and place."""

    date: datetime
    coordinates: Coordinates
    solar_noon: EventTime
    day_length: timedelta
    sunrise: EventTime
    sunset: EventTime
    civil_dawn: EventTime
    civil_dusk: EventTime
    nautical_dawn: EventTime
    nautical_dusk: EventTime
    astronomical_dawn: EventTime
    astronomical_dusk: EventTime

    @classmethod
    def from_calculations(cls, solar_calculations: SolarCalculations) -> Report:
        def when(name: RawEventName) -> EventTime:
            return solar_calculations.event_time(event_from_name(name))

        return cls(
            date=solar_calculations.date,
            coordinates=solar_calculations.coordinates,
            solar_noon=when(RawEventName.SOLAR_NOON),
            day_length=solar_calculations.day_length(),
            sunrise=when(RawEventName.SUNRISE),
            sunset=when(RawEventName.SUNSET),
            civil_dawn=when(RawEventName.CIVIL_DAWN),
            civil_dusk=when(RawEventName.CIVIL_DUSK),
            nautical_dawn=when(RawEventName.NAUTICAL_DAWN),
            nautical_dusk=when(RawEventName.NAUTICAL_DUSK),
            astronomical_dawn=when(RawEventName.ASTRONOMICAL_DAWN),
            astronomical_dusk=when(RawEventName.ASTRONOMICAL_DUSK),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _rfc3339(self.date),
            "location": self.coordinates.to_dict(),
            "day_length": _whole_seconds(self.day_length),
            "solar_noon": self.solar_noon.to_json(),
            "sunrise": self.sunrise.to_json(),
            "sunset": self.sunset.to_json(),
            "dawn": {
                "civil": self.civil_dawn.to_json(),
                "nautical": self.nautical_dawn.to_json(),
                "astronomical": self.astronomical_dawn.to_json(),
            },
            "dusk": {
                "civil": self.civil_dusk.to_json(),
                "nautical": self.nautical_dusk.to_json(),
                "astronomical": self.astronomical_dusk.to_json(),
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def format_report(self) -> str:
        return (
            "LOCATION\n"
            "--------\n"
            f"Latitude: {self.coordinates.latitude}\n"
            f"Longitude: {self.coordinates.longitude}\n\n"
            "DATE\n"
            "----\n"
            f"{EventTime(self.date)}\n\n"
            f"Solar noon is at:         {self.solar_noon}\n"
            f"The day length is:        {day_length_hms(self.day_length)}\n\n"
            f"Sunrise is at:            {self.sunrise}\n"
            f"Sunset is at:             {self.sunset}\n\n"
            f"Civil dawn is at:         {self.civil_dawn}\n"
            f"Civil dusk is at:         {self.civil_dusk}\n\n"
            f"Nautical dawn is at:      {self.nautical_dawn}\n"
            f"Nautical dusk is at:      {self.nautical_dusk}\n\n"
            f"Astronomical dawn is at:  {self.astronomical_dawn}\n"
            f"Astronomical dusk is at:  {self.astronomical_dusk}\n"
            "        "
        )

    def __str__(self) -> str:
        return self.format_report()


@dataclass(frozen=True)
class PollReport:
    """The Sun's position at one moment and place."""

    date: datetime
    coordinates: Coordinates
    solar_elevation: float
    azimuth_angle: float

    @classmethod
    def from_calculations(cls, solar_calculations: SolarCalculations) -> PollReport:
        return cls(
            date=solar_calculations.date,
            coordinates=solar_calculations.coordinates,
            solar_elevation=solar_calculations.solar_elevation(),
            azimuth_angle=solar_calculations.azimuth_angle(),
        )

    @property
    def day_part(self) -> DayPart:
        return DayPart.from_elevation_angle(self.solar_elevation)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _rfc3339(self.date),
            "location": self.coordinates.to_dict(),
            "day_part": self.day_part.value,
            "solar_elevation": _json_float(self.solar_elevation),
            "azimuth_angle": _json_float(self.azimuth_angle),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def __str__(self) -> str:
        date_text = self.date.strftime("%Y-%m-%d %H:%M:%S") + " " + _offset_text(self.date)
        return (
            "LOCATION\n"
            "--------\n"
            f"Latitude:  {self.coordinates.latitude}\n"
            f"Longitude: {self.coordinates.longitude}\n\n"
            "DATE\n"
            "----\n"
            f"{date_text}\n"
            f"{self.day_part}\n\n"
            f"Solar elevation: {self.solar_elevation:.3f}°\n"
            f"Azimuth angle:   {self.azimuth_angle:.3f}°\n"
        )