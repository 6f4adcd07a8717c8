"""Command-line parsing and runtime configuration."""

from __future__ import annotations

import argparse
import os
import re
import sys
import tomllib
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path

from heliocron.domain import (
    Altitude,
    Coordinates,
    Latitude,
    Longitude,
    PollAction,
    RawEventName,
    ReportAction,
    WaitAction,
    event_from_name,
)

_OFFSET_MESSAGE = "Expected an offset in the format '[-]HH:MM' or '[-]HH:MM:SS'"
_TZ_PATTERN = re.compile(r"([+-])(\d{2}):(\d{2})")
_DEFAULT_LATITUDE = 51.4769
_DEFAULT_LONGITUDE = -0.0005
_CONFIG_NAME = "heliocron.toml"
_HYPHEN_VALUE_OPTIONS = frozenset(
    {"-t", "--time-zone", "-l", "--latitude", "-o", "--longitude",
     "--offset", "-a", "--altitude"}
)


@dataclass(frozen=True)
class Config:
    """Everything needed to run one command."""

    coordinates: Coordinates
    date: datetime
    action: ReportAction | WaitAction | PollAction


def parse_offset(text: str) -> timedelta:
    """Parse '[-]HH:MM' or '[-]HH:MM:SS' into a signed duration."""
    negative = text.startswith("-")
    body = text[1:] if negative else text
    pattern = "%H:%M" if len(body) == 5 else "%H:%M:%S"
    try:
        parsed = datetime.strptime(body, pattern).time()
    except ValueError:
        raise ValueError(_OFFSET_MESSAGE) from None
    offset = timedelta(hours=parsed.hour, minutes=parsed.minute, seconds=parsed.second)
    return -offset if negative else offset


def parse_date(text: str) -> date:
    """Parse a date in 'yyyy-mm-dd' form."""
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(
            f"Invalid date - must be in the format 'yyyy-mm-dd'. Found '{text}'"
        ) from None


def parse_tz(text: str) -> timezone:
    """Parse a fixed UTC offset in '[+|-]HH:MM' form."""
    match = _TZ_PATTERN.fullmatch(text)
    if match is None or int(match[2]) > 23 or int(match[3]) > 59:
        raise ValueError(
            "Invalid time zone - expected the format '[+|-]HH:MM' between "
            f"'-23:59' and '+23:59'. Found '{text}'"
        )
    offset = timedelta(hours=int(match[2]), minutes=int(match[3]))
    return timezone(-offset if match[1] == "-" else offset)


def parse_local_config(path: str | os.PathLike[str]) -> Coordinates:
    """Read coordinates from a TOML configuration file; raise ValueError if unusable."""
    try:
        content = Path(path).read_bytes()
    except OSError:
        raise ValueError("Failed to read config file path") from None
    try:
        data = tomllib.loads(content.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ValueError(str(exc)) from None

    latitude, longitude = data.get("latitude"), data.get("longitude")
    for value in (latitude, longitude):
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, (int, float))
        ):
            raise ValueError(f"invalid type: expected a number, found {value!r}")
    if latitude is None and longitude is None:
        raise ValueError("Missing latitude and longitude")
    if latitude is None:
        raise ValueError("Missing latitude")
    if longitude is None:
        raise ValueError("Missing longitude")
    return Coordinates(Latitude(latitude), Longitude(longitude))


def default_config_path() -> Path | None:
    """Where the user's configuration file lives, if a config directory is known."""
    if sys.platform == "win32":
        base = os.environ.get("APPDATA")
        return Path(base) / _CONFIG_NAME if base else None
    home = os.environ.get("HOME")
    if sys.platform == "darwin":
        return Path(home) / "Library" / "Application Support" / _CONFIG_NAME if home else None
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg) / _CONFIG_NAME
    return Path(home) / ".config" / _CONFIG_NAME if home else None


def _argument_type(parse, name: str):
    def convert(text: str):
        try:
            return parse(text)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None

    convert.__name__ = name
    return convert


def _local_now() -> datetime:
    now = datetime.now().astimezone()
    return now.replace(tzinfo=timezone(now.utcoffset()))


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the command line."""
    parser = argparse.ArgumentParser(
        prog="heliocron",
        description=(
            "A simple program for calculating sunrise, sunset and related times, "
            "which can be integrated with cron to trigger other programs to run "
            "when these events occur"
        ),
    )
    parser.add_argument("-V", "--version", action="version", version="heliocron 1.0.0")
    parser.add_argument(
        "-d", "--date", type=_argument_type(parse_date, "date"), default=None,
        help="Date in 'yyyy-mm-dd' format; defaults to the current local date",
    )
    parser.add_argument(
        "-t", "--time-zone", dest="time_zone", type=_argument_type(parse_tz, "time zone"),
        default=None, help="Time zone as '[+/-]HH:MM'; defaults to the local time zone",
    )
    parser.add_argument(
        "-l", "--latitude", type=_argument_type(Latitude.parse, "latitude"),
        default=None, help="Latitude in decimal degrees, positive to the north",
    )
    parser.add_argument(
        "-o", "--longitude", type=_argument_type(Longitude.parse, "longitude"),
        default=None, help="Longitude in decimal degrees, positive to the east",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    report = commands.add_parser(
        "report", help="Produce a full set of sunrise, sunset and other related times"
    )
    report.add_argument("--json", action="store_true", help="Output machine-readable JSON")

    wait = commands.add_parser(
        "wait", help="Wait until the chosen event (+/- optional offset) occurs"
    )
    wait.add_argument(
        "-e", "--event", dest="event_name", required=True,
        type=_argument_type(RawEventName, "event"),
        choices=list(RawEventName), metavar="{" + ",".join(n.value for n in RawEventName) + "}",
        help="The event from which to base the delay",
    )
    wait.add_argument(
        "-o", "--offset", type=_argument_type(parse_offset, "offset"),
        default=timedelta(0), help="Delay from the event as '[-]HH:MM' or '[-]HH:MM:SS'",
    )
    wait.add_argument(
        "-a", "--altitude", dest="custom_altitude",
        type=_argument_type(Altitude.parse, "altitude"), default=None,
        help="Degrees of the Sun's centre below the horizon, for custom events",
    )
    wait.add_argument("--tag", default=None, help="A description to identify the process")
    wait.add_argument(
        "--run-missed-event", dest="run_missed_task", action="store_true",
        help="Run the task even if the event was missed by more than 30 seconds",
    )

    poll = commands.add_parser("poll", help="Display real time data about the Sun")
    poll.add_argument("--watch", action="store_true", help="Update every second")
    poll.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    return parser


def _join_hyphen_values(argv: list[str]) -> list[str]:
    """Attach values that start with '-' to their option so they are not read as flags."""
    joined: list[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token in _HYPHEN_VALUE_OPTIONS:
            value = next(tokens, None)
            if value is None:
                joined.append(token)
            elif value.startswith("-") and len(value) > 1:
                joined.append(f"{token}={value}")
            else:
                joined.extend((token, value))
        else:
            joined.append(token)
    return joined


def _resolve_coordinates(latitude: Latitude | None, longitude: Longitude | None) -> Coordinates:
    if latitude is not None and longitude is not None:
        return Coordinates(latitude, longitude)
    path = default_config_path()
    if path is not None and path.exists():
        try:
            return parse_local_config(path)
        except ValueError as exc:
            print(
                "Warning - couldn't parse configuration file due to the following "
                f"reason: {exc}\n. Proceeding with default coordinates.",
                file=sys.stderr,
            )
    return Coordinates(Latitude(_DEFAULT_LATITUDE), Longitude(_DEFAULT_LONGITUDE))


def parse_config(argv: list[str] | None = None) -> Config:
    """Combine command-line arguments, the config file and defaults into a Config."""
    parser = build_parser()
    args = parser.parse_args(_join_hyphen_values(list(sys.argv[1:] if argv is None else argv)))

    if (args.latitude is None) != (args.longitude is None):
        missing = "--longitude" if args.longitude is None else "--latitude"
        parser.error(f"The following required arguments were not provided: {missing}")

    coordinates = _resolve_coordinates(args.latitude, args.longitude)

    if args.command == "poll":
        moment = _local_now()
        action = PollAction(watch=args.watch, json=args.json)
    else:
        now = _local_now()
        day = args.date if args.date is not None else now.date()
        zone = args.time_zone if args.time_zone is not None else now.tzinfo
        moment = datetime.combine(day, time(12, 0, 0), tzinfo=zone)
        if args.command == "report":
            action = ReportAction(json=args.json)
        else:
            name = args.event_name
            if name in (RawEventName.CUSTOM_AM, RawEventName.CUSTOM_PM) and args.custom_altitude is None:
                parser.error("The following required arguments were not provided: --altitude")
            action = WaitAction(
                event=event_from_name(name, args.custom_altitude),
                offset=args.offset,
                run_missed_task=args.run_missed_task,
            )
    return Config(coordinates=coordinates, date=moment, action=action)