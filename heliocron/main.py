"""Entry point for the heliocron command."""

from __future__ import annotations

import sys

from heliocron.calc import SolarCalculations
from heliocron.cli import parse_config
from heliocron.domain import PollAction, ReportAction, WaitAction
from heliocron.errors import HeliocronError
from heliocron.subcommands import display_report, poll, wait


def run(argv: list[str] | None = None) -> None:
    """Parse the arguments and carry out the chosen command."""
    config = parse_config(argv)
    calculations = SolarCalculations(config.date, config.coordinates)
    action = config.action
    match action:
        case ReportAction(json=json_output):
            display_report(calculations, json_output)
        case WaitAction(event=event, offset=offset, run_missed_task=run_missed):
            wait(event, offset, calculations, run_missed)
        case PollAction(watch=watch, json=json_output):
            poll(calculations, watch, json_output)


def main(argv: list[str] | None = None) -> int:
    """Run the command; print any error and return the exit status."""
    try:
        run(argv)
    except HeliocronError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())