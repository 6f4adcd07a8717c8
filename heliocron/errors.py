"""Errors raised while configuring or running the program."""

from __future__ import annotations

import enum
from datetime import datetime

from heliocron.domain import EventTime


class HeliocronError(Exception):
    """Base class for all errors reported to the user."""


class ConfigErrorKind(enum.Enum):
    """What went wrong while reading configuration."""

    INVALID_COORDINATES = "Invalid coordinates"
    INVALID_TOML_FILE = "Error parsing TOML file. Ensure that it is of the correct format."
    PARSE_DATE = "Error parsing date. Ensure the date is formatted correctly."
    PARSE_ALTITUDE = "Error parsing altitude. Must be a number between -90.0 and 90.0."
    PARSE_OFFSET = (
        "Error parsing offset. Expected a string in the format HH:MM:SS or HH:MM."
    )
    INVALID_EVENT = "Error parsing event."


class ConfigError(HeliocronError):
    """The configuration could not be understood."""

    def __init__(self, kind: ConfigErrorKind, message: str | None = None) -> None:
        if kind is ConfigErrorKind.INVALID_COORDINATES and message is None:
            raise ValueError("invalid coordinates need a message")
        super().__init__(kind, message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        if self.kind is ConfigErrorKind.INVALID_COORDINATES:
            detail = f"Invalid coordinates - {self.message}"
        else:
            detail = self.kind.value
        return f"Config error: {detail}"


class HeliocronRuntimeError(HeliocronError):
    """Base class for errors that happen while running a command."""


class NonOccurringEventError(HeliocronRuntimeError):
    """The chosen event does not happen on the chosen day."""

    def __str__(self) -> str:
        return "Runtime error: The chosen event does not occur on this day."


class PastEventError(HeliocronRuntimeError):
    """The moment to wait for has already passed."""

    def __init__(self, when: datetime) -> None:
        super().__init__(when)
        self.when = when

    def __str__(self) -> str:
        return (
            f"Runtime error: The chosen event occurred in the past: "
            f"{EventTime(self.when)}. Cannot wait a negative amount of time."
        )


class EventMissedError(HeliocronRuntimeError):
    """The event passed by more than the allowed tolerance while waiting."""

    def __init__(self, seconds: int) -> None:
        super().__init__(seconds)
        self.seconds = seconds

    def __str__(self) -> str:
        return f"Runtime error: Event missed by {self.seconds}s"


class SleepError(HeliocronRuntimeError):
    """The system could not put the program to sleep."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause)
        self.cause = cause

    def __str__(self) -> str:
        return f"Runtime error: {self.cause}"