"""Sunrise, sunset, twilight and solar position calculations, with a cron-friendly wait command."""

__version__ = "1.0.0"