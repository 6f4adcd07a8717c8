"""Sleeping until a moment on the wall clock."""

from __future__ import annotations

import os
import time
from datetime import datetime, timezone

from heliocron.domain import EventTime
from heliocron.errors import PastEventError, SleepError

FAKE_SLEEP_VARIABLE = "HELIOCRON_FAKE_SLEEP"
_MAX_NAP = 60.0


def sleep_until(moment: datetime) -> None:
    """Block until the wall clock reaches the moment.

    Sleeps in bounded naps and rechecks the clock, so time spent suspended
    is accounted for.
    """
    try:
        while True:
            remaining = (moment - datetime.now(timezone.utc)).total_seconds()
            if remaining <= 0:
                return
            time.sleep(min(remaining, _MAX_NAP))
    except OSError as exc:
        raise SleepError(exc) from exc


def wait_until(moment: datetime) -> None:
    """Announce and sleep until the moment; raise PastEventError if it has passed."""
    now = datetime.now(timezone.utc)
    delta = moment - now
    if delta.total_seconds() < 0:
        raise PastEventError(moment)
    print(
        f"Thread going to sleep for {int(delta.total_seconds())} seconds until "
        f"{EventTime(moment)}. Press ctrl+C to cancel."
    )
    if os.environ.get(FAKE_SLEEP_VARIABLE):
        print(f"Fake sleep until {EventTime(moment)}.")
    else:
        sleep_until(moment)