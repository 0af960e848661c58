"""Shared utilities.

Instants are represented as naive UTC datetimes throughout the application.
Local wall-clock values are naive datetimes in the location's time, and are only
converted to instants through an explicit UTC offset, never through the host's
timezone configuration.
"""

# Standard library imports
import datetime
import re

# Wall-clock format used by the Open-Meteo hourly feed
LOCAL_TIME_FORMAT = "%Y-%m-%dT%H:%M"
DATE_KEY_FORMAT = "%Y-%m-%d"

_LOCAL_TIME_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")

# Range of real-world UTC offsets
MIN_UTC_OFFSET_SECONDS = -12 * 3600
MAX_UTC_OFFSET_SECONDS = 14 * 3600


def utc_now() -> datetime.datetime:
    """Returns the current time in UTC as a naive datetime (without timezone information)."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def to_naive_utc(t: datetime.datetime) -> datetime.datetime:
    """Normalize a datetime to a naive UTC instant.

    Naive datetimes are assumed to already be UTC and are returned unchanged.
    """
    if t.tzinfo is None:
        return t
    return t.astimezone(datetime.timezone.utc).replace(tzinfo=None)


def parse_local_time(value: str) -> datetime.datetime:
    """Parse a "YYYY-MM-DDTHH:MM" wall-clock string into a naive datetime.

    Raises:
        ValueError: If the string is not in that exact form or is not a real date/time
    """
    if not isinstance(value, str) or not _LOCAL_TIME_RE.fullmatch(value):
        raise ValueError(f"Expected YYYY-MM-DDTHH:MM wall-clock time, got {value!r}")
    return datetime.datetime.strptime(value, LOCAL_TIME_FORMAT)


def format_local_time(t: datetime.datetime) -> str:
    """Format a wall-clock datetime as "YYYY-MM-DDTHH:MM", dropping seconds."""
    return t.strftime(LOCAL_TIME_FORMAT)


def local_to_utc(local: datetime.datetime, utc_offset_seconds: int) -> datetime.datetime:
    """Convert a location's wall-clock time into a naive UTC instant."""
    return local - datetime.timedelta(seconds=utc_offset_seconds)


def utc_to_local(instant: datetime.datetime, utc_offset_seconds: int) -> datetime.datetime:
    """Convert a naive UTC instant into the location's wall-clock time."""
    return to_naive_utc(instant) + datetime.timedelta(seconds=utc_offset_seconds)


def local_date_key(instant: datetime.datetime, utc_offset_seconds: int) -> str:
    """Return the location's calendar date (YYYY-MM-DD) at the given instant."""
    return utc_to_local(instant, utc_offset_seconds).strftime(DATE_KEY_FORMAT)
