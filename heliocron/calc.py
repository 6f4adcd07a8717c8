"""Solar position and event-time calculations."""

from __future__ import annotations

import math
from datetime import datetime, time, timedelta, tzinfo

from heliocron.domain import (
    Altitude,
    Coordinates,
    Direction,
    EventTime,
    FixedElevationEvent,
    RawEventName,
    VariableElevationEvent,
    event_from_name,
)
from heliocron.timeutil import day_fraction, to_julian_date


def offset_to_decimal_float(offset: timedelta | tzinfo) -> float:
    """Return a UTC offset as decimal hours, e.g. +01:30 gives 1.5."""
    if isinstance(offset, tzinfo):
        resolved = offset.utcoffset(None)
        if resolved is None:
            raise ValueError("the time zone has no fixed UTC offset")
        offset = resolved
    seconds = offset // timedelta(seconds=1)
    return seconds / 3600.0


def _acos(value: float) -> float:
    """Arc cosine in degrees' radians that yields NaN outside [-1, 1]."""
    if math.isnan(value) or not -1.0 <= value <= 1.0:
        return math.nan
    return math.acos(value)


def _div(numerator: float, denominator: float) -> float:
    """Division following IEEE rules instead of raising on zero."""
    if denominator != 0.0:
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
    return math.copysign(math.inf, sign)


def _powi(base: float, exponent: int) -> float:
    """Raise to a small positive integer power by repeated squaring."""
    result = 1.0
    while True:
        if exponent & 1:
            result *= base
        exponent //= 2
        if exponent == 0:
            return result
        base *= base


def _fract(value: float) -> float:
    return math.modf(value)[0]


class SolarCalculations:
    """The Sun's position and derived quantities for one moment and place."""

    def __init__(self, date: datetime, coordinates: Coordinates) -> None:
        offset = date.utcoffset()
        if offset is None:
            raise ValueError("the date must carry a UTC offset")

        self.date = date
        self.coordinates = coordinates

        latitude = float(coordinates.latitude)
        longitude = float(coordinates.longitude)
        time_zone = offset_to_decimal_float(offset)
        julian_date = to_julian_date(date)

        julian_century = (julian_date - 2451545.0) / 36525.0

        mean_longitude = math.fmod(
            280.46646 + julian_century * (36000.76983 + julian_century * 0.0003032),
            360.0,
        )
        mean_anomaly = 357.52911 + julian_century * (
            35999.05029 - 0.0001537 * julian_century
        )
        eccentricity = 0.016708634 - julian_century * (
            0.000042037 + 0.0000001267 * julian_century
        )

        equation_of_center = (
            math.sin(math.radians(mean_anomaly))
            * (1.914602 - julian_century * (0.004817 + 0.000014 * julian_century))
            + math.sin(math.radians(2.0 * mean_anomaly))
            * (0.019993 - 0.000101 * julian_century)
            + math.sin(math.radians(3.0 * mean_anomaly)) * 0.000289
        )

        true_longitude = mean_longitude + equation_of_center
        apparent_longitude = (
            true_longitude
            - 0.00569
            - 0.00478 * math.sin(math.radians(125.04 - 1934.136 * julian_century))
        )

        mean_obliquity = 23.0 + (
            26.0
            + (
                21.448
                - julian_century
                * (46.815 + julian_century * (0.00059 - julian_century * 0.001813))
            )
            / 60.0
        ) / 60.0
        obliquity = mean_obliquity + 0.00256 * math.cos(
            math.radians(125.04 - 1934.136 * julian_century)
        )

        declination = math.degrees(
            math.asin(
                math.sin(math.radians(obliquity))
                * math.sin(math.radians(apparent_longitude))
            )
        )

        tan_half = math.tan(math.radians(obliquity / 2.0))
        var_y = tan_half * tan_half

        equation_of_time = 4.0 * math.degrees(
            var_y * math.sin(math.radians(mean_longitude) * 2.0)
            - 2.0 * eccentricity * math.sin(math.radians(mean_anomaly))
            + 4.0
            * eccentricity
            * var_y
            * math.sin(math.radians(mean_anomaly))
            * math.cos(math.radians(mean_longitude) * 2.0)
            - 0.5 * var_y * var_y * math.sin(math.radians(mean_longitude) * 4.0)
            - 1.25
            * eccentricity
            * eccentricity
            * math.sin(math.radians(mean_anomaly) * 2.0)
        )

        self.solar_declination = declination
        self.solar_noon_fraction = (
            720.0 - 4.0 * longitude - equation_of_time + time_zone * 60.0
        ) / 1440.0

        true_solar_time = math.fmod(
            day_fraction(date) * 1440.0
            + equation_of_time
            + 4.0 * longitude
            - 60.0 * time_zone,
            1440.0,
        )
        if true_solar_time / 4.0 < 0.0:
            true_hour_angle = true_solar_time / 4.0 + 180.0
        else:
            true_hour_angle = true_solar_time / 4.0 - 180.0

        sin_lat = math.sin(math.radians(latitude))
        cos_lat = math.cos(math.radians(latitude))
        sin_decl = math.sin(math.radians(declination))
        cos_decl = math.cos(math.radians(declination))

        zenith = math.degrees(
            _acos(
                sin_lat * sin_decl
                + cos_lat * cos_decl * math.cos(math.radians(true_hour_angle))
            )
        )
        elevation = 90.0 - zenith

        if elevation > 85.0:
            refraction = 0.0
        elif elevation > 5.0:
            tan_elev = math.tan(math.radians(elevation))
            refraction = (
                58.1 / tan_elev
                - 0.07 / _powi(tan_elev, 3)
                + 0.000086 / _powi(tan_elev, 5)
            )
        elif elevation > -0.575:
            refraction = 1735.0 + elevation * (
                103.4 + elevation * (-12.79 + elevation * 0.711)
            )
        else:
            refraction = _div(-20.772, math.tan(math.radians(elevation)))
        self._corrected_elevation = elevation + refraction / 3600.0

        azimuth_base = math.degrees(
            _acos(
                _div(
                    sin_lat * math.cos(math.radians(zenith)) - sin_decl,
                    cos_lat * math.sin(math.radians(zenith)),
                )
            )
        )
        if true_hour_angle > 0.0:
            self._azimuth = azimuth_base + 180.0
        else:
            self._azimuth = math.fmod(540.0 - azimuth_base, 360.0)

    def __repr__(self) -> str:
        return (
            f"SolarCalculations(date={self.date!r}, "
            f"coordinates={self.coordinates!r})"
        )

    def refresh(self, date: datetime) -> SolarCalculations:
        """Recalculate for a new moment at the same place."""
        return SolarCalculations(date, self.coordinates)

    def solar_elevation(self) -> float:
        """Solar elevation in degrees, corrected for atmospheric refraction."""
        return self._corrected_elevation

    def azimuth_angle(self) -> float:
        """Solar azimuth in degrees clockwise from north."""
        return self._azimuth

    def solar_noon(self) -> EventTime:
        return EventTime(self.day_fraction_to_datetime(self.solar_noon_fraction))

    def day_fraction_to_datetime(self, day_fraction: float) -> datetime:
        """Turn a fraction of the calculation day into a moment, spilling into
        the previous or next day when the fraction is out of range."""
        day = self.date.date()
        if day_fraction < 0.0:
            day -= timedelta(days=1)
            day_fraction = abs(day_fraction)
        elif day_fraction >= 1.0:
            day += timedelta(days=1)
            day_fraction -= 1.0

        hour_fraction = day_fraction * 24.0
        minute_fraction = _fract(hour_fraction) * 60.0
        second_fraction = _fract(minute_fraction) * 60.0

        moment = time(
            int(hour_fraction), int(minute_fraction), int(second_fraction)
        )
        return datetime.combine(day, moment, tzinfo=self.date.tzinfo)

    def _hour_angle(self, degrees_below_horizon: float) -> float | None:
        event_angle = float(degrees_below_horizon) + 90.0
        latitude = math.radians(float(self.coordinates.latitude))
        declination = math.radians(self.solar_declination)
        hour_angle = math.degrees(
            _acos(
                _div(
                    math.cos(math.radians(event_angle)),
                    math.cos(latitude) * math.cos(declination),
                )
                - math.tan(latitude) * math.tan(declination)
            )
        )
        return None if math.isnan(hour_angle) else hour_angle

    def event_time(
        self, event: FixedElevationEvent | VariableElevationEvent
    ) -> EventTime:
        """When the event happens on the calculation day, if at all."""
        if isinstance(event, VariableElevationEvent):
            if event is VariableElevationEvent.SOLAR_NOON:
                return self.solar_noon()
            raise ValueError(f"unsupported event: {event!r}")

        hour_angle = self._hour_angle(Altitude(event.degrees_below_horizon))
        if hour_angle is None:
            return EventTime(None)

        if event.solar_direction is Direction.ASCENDING:
            fraction = self.solar_noon_fraction - hour_angle / 360.0
        else:
            fraction = self.solar_noon_fraction + hour_angle / 360.0
        return EventTime(self.day_fraction_to_datetime(fraction))

    def day_length(self) -> timedelta:
        """Time between sunrise and sunset; a full day or nothing at the poles."""
        sunrise = self.event_time(event_from_name(RawEventName.SUNRISE))
        sunset = self.event_time(event_from_name(RawEventName.SUNSET))
        if sunrise.moment is not None and sunset.moment is not None:
            return sunset.moment - sunrise.moment
        # No sunrise or sunset: the Sun either never sets or never rises.
        if self.max_solar_elevation() >= 0.833:
            return timedelta(hours=24)
        return timedelta(0)

    def max_solar_elevation(self) -> float:
        """Refraction-corrected solar elevation at solar noon."""
        noon = self.solar_noon().moment
        return SolarCalculations(noon, self.coordinates).solar_elevation()