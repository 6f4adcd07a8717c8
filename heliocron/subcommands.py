"""The work behind each command."""

from __future__ import annotations

import sys
import time
from datetime import datetime, timedelta, timezone

from heliocron.calc import SolarCalculations
from heliocron.domain import FixedElevationEvent, VariableElevationEvent
from heliocron.errors import EventMissedError, NonOccurringEventError
from heliocron.report import PollReport, Report
from heliocron.waiting import wait_until

_MISSED_TOLERANCE_SECONDS = 30
_SAVE_CURSOR = "\x1b7"
_RESTORE_CURSOR = "\x1b8"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_DOWN = "\x1b[J"


def display_report(solar_calculations: SolarCalculations, json_output: bool) -> None:
    """Print the day's report as text or JSON."""
    report = Report.from_calculations(solar_calculations)
    print(report.to_json() if json_output else str(report))


def wait(
    event: FixedElevationEvent | VariableElevationEvent,
    offset: timedelta,
    solar_calculations: SolarCalculations,
    run_missed_task: bool,
) -> None:
    """Sleep until the event plus offset; raise if it never happens or was missed."""
    moment = solar_calculations.event_time(event).moment
    if moment is None:
        raise NonOccurringEventError()
    target = moment + offset
    wait_until(target)
    if run_missed_task:
        return
    missed_by = int((datetime.now(timezone.utc) - target).total_seconds())
    if missed_by > _MISSED_TOLERANCE_SECONDS:
        raise EventMissedError(missed_by)


def _local_now() -> datetime:
    now = datetime.now().astimezone()
    return now.replace(tzinfo=timezone(now.utcoffset()))


def poll(solar_calculations: SolarCalculations, watch: bool, json_output: bool) -> None:
    """Print the Sun's position, once or every second until interrupted."""
    report = PollReport.from_calculations(solar_calculations)
    if not watch:
        print(report.to_json() if json_output else str(report))
        return

    out = sys.stdout
    if not json_output:
        print("Displaying solar calculations in real time. Press ctrl+C to cancel.\n")
    out.write(_SAVE_CURSOR + _HIDE_CURSOR)
    out.flush()
    try:
        while True:
            if json_output:
                print(report.to_json(), flush=True)
            else:
                out.write(_RESTORE_CURSOR + _CLEAR_DOWN + str(report))
                out.flush()
            time.sleep(1)
            report = PollReport.from_calculations(solar_calculations.refresh(_local_now()))
    finally:
        out.write(_SHOW_CURSOR)
        out.flush()