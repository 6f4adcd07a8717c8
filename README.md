# heliocron

A command-line program for calculating sunrise, sunset and related times
(solar noon, civil, nautical and astronomical dawn and dusk) for any date and
location. It can also wait until one of those events occurs, which makes it
easy to combine with cron to run other programs at sunrise, sunset or any
custom solar elevation. It has no dependencies beyond the Python standard
library (Python 3.11 or later).

## Installation

```
pip install .
```

This installs the `heliocron` command. `heliocron --help` lists the options
and `heliocron --version` prints the version.

## Location

The location is chosen in this order:

1. `--latitude` / `-l` and `--longitude` / `-o` on the command line (both must
   be given together);
2. a `heliocron.toml` file in your configuration directory
   (`$XDG_CONFIG_HOME` or `~/.config` on Linux and other Unix systems,
   `~/Library/Application Support` on macOS, `%APPDATA%` on Windows):

   ```toml
   latitude = 51.4769
   longitude = -0.0005
   ```

   If the file exists but cannot be used, a warning is printed to standard
   error and the default is used instead;

3. the default of latitude `51.4769`, longitude `-0.0005`.

Latitudes run from -90.0 to 90.0 (positive to the north) and longitudes from
-180.0 to 180.0 (positive to the east).

## Global options

These come before the command name:

- `--date` / `-d` `yyyy-mm-dd`: the date to calculate for (defaults to today).
- `--time-zone` / `-t` `[+|-]HH:MM`: a fixed UTC offset (defaults to the
  current local offset).

Calculations for `report` and `wait` are made for 12:00 on that date in that
time zone.

## Reports

```
heliocron --date 2022-06-11 --time-zone +01:00 --latitude 51.4 --longitude -5.4670 report
```

prints a human-readable summary: the location, the date, solar noon, the day
length (as `Hh Mm Ss`), sunrise and sunset, and the three kinds of dawn and
dusk. Add `--json` for machine-readable output:

```
heliocron -d 2022-06-11 -t +01:00 -l 51.4 -o -5.4670 report --json
```

The JSON object has the keys `date`, `location` (`latitude`, `longitude`),
`day_length` (in seconds), `solar_noon`, `sunrise`, `sunset`, and `dawn` and
`dusk`, each holding `civil`, `nautical` and `astronomical`. Times are
RFC 3339 strings.

Events that do not happen on the chosen day (for example astronomical dusk
in midsummer at high latitudes) are shown as `Never` in text output and
`null` in JSON. When there is no sunrise or sunset, the day length is 24 hours
if the Sun stays up and 0 if it stays down.

## Waiting for an event

```
heliocron wait --event sunset --offset -00:30
```

prints how long it is going to sleep, sleeps until thirty minutes before
sunset and then exits successfully, so a crontab line such as

```
0 12 * * * heliocron wait --event sunset && turn-on-the-lights
```

runs a command at sunset every day.

Events: `sunrise`, `sunset`, `civil_dawn`, `civil_dusk`, `nautical_dawn`,
`nautical_dusk`, `astronomical_dawn`, `astronomical_dusk`, `solar_noon`,
`custom_am` and `custom_pm`. The custom events need `--altitude` / `-a`, the
elevation of the centre of the Sun below the horizon, between -90.0 and 90.0
(negative values are above the horizon); for other events it is ignored:

```
heliocron wait --event custom_am --altitude 8.5
```

Further options of `wait`:

- `--offset` / `-o` `[-]HH:MM[:SS]`: run before (negative) or after the event.
- `--tag TEXT`: a label to identify the process; it has no other effect.
- `--run-missed-event`: still succeed if the wake-up came more than
  30 seconds late (for example after the machine was suspended).

The sleep is done in naps of at most a minute that recheck the wall clock,
so time spent suspended is accounted for. Setting the environment variable
`HELIOCRON_FAKE_SLEEP` to a non-empty value skips the actual sleep, which is
useful for testing.

## Live solar position

```
heliocron poll
```

shows the current solar elevation and azimuth (corrected for atmospheric
refraction) and the part of the day: Day, Civil Twilight, Nautical Twilight,
Astronomical Twilight or Night. `--watch` updates the display every second
until interrupted, and `--json` prints objects with the keys `date`,
`location`, `day_part`, `solar_elevation` and `azimuth_angle`.

## Exit status

- `0`: success.
- `1`: the event does not occur on that day, it already lies in the past,
  it was missed by more than 30 seconds, or sleeping failed; the message is
  printed to standard error.
- `2`: the command-line arguments are invalid.
- `130`: interrupted with Ctrl+C.

## Using it from Python

```python
from datetime import datetime, timedelta, timezone

from heliocron.calc import SolarCalculations
from heliocron.domain import Coordinates, Latitude, Longitude, event_from_name
from heliocron.report import Report

date = datetime(2022, 6, 11, 12, tzinfo=timezone(timedelta(hours=1)))
calcs = SolarCalculations(date, Coordinates(Latitude(51.4), Longitude(-5.467)))

report = Report.from_calculations(calcs)
print(report.sunrise)    # 2022-06-11 05:05:24 +01:00
print(report.to_json())

print(calcs.event_time(event_from_name("custom_pm", 8.5)))
print(calcs.day_length())
```

`heliocron.report.PollReport.from_calculations` gives the solar position for
the moment held by a `SolarCalculations`, and `heliocron.main.main(argv)` runs
the command line with a list of arguments and returns the exit status.