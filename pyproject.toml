[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "heliocron"
version = "1.0.0"
description = "Calculate sunrise, sunset and related solar times, and wait for them so that cron can trigger other programs when these events occur"
requires-python = ">=3.11"
dependencies = []
keywords = ["cron", "crontab", "sunrise", "sunset", "twilight", "solar", "scheduler"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
heliocron = "heliocron.main:main"

[tool.hatch.build.targets.wheel]
packages = ["heliocron"]

[tool.pytest.ini_options]
addopts = "-ra"
