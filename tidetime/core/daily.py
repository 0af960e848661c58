"""Daily aggregation of tide events and conditions.

These functions window the extracted tide events and the daily summary tables to
"today" in the location's local time, and work out where the tide is heading.
"""

import datetime
from typing import Any, Optional, Sequence

import pandas as pd

from tidetime import util
from tidetime.types import (
    DailySummary,
    NextTide,
    TideCategory,
    TideEvent,
    TideReport,
    TrendStatus,
)

# Daily table columns, as named by Open-Meteo
WAVE_HEIGHT_MAX = "wave_height_max"
WIND_SPEED_MAX = "wind_speed_10m_max"
SUNRISE = "sunrise"
SUNSET = "sunset"


def today_key(now: datetime.datetime, utc_offset_seconds: int) -> str:
    """Return the location's current calendar date as "YYYY-MM-DD"."""
    return util.local_date_key(now, utc_offset_seconds)


def daily_value(
    table: Optional[pd.DataFrame], date_key: str, column: str
) -> Optional[Any]:
    """Look up a single daily value, or None when it is not available.

    Missing tables, dates, columns and null cells all resolve to None.
    """
    if table is None or column not in table.columns or date_key not in table.index:
        return None
    value = table.at[date_key, column]
    if pd.isna(value):
        return None
    return value


def _optional_float(value: Optional[Any]) -> Optional[float]:
    return None if value is None else float(value)


def daily_summary(
    daily_marine: Optional[pd.DataFrame],
    daily_forecast: Optional[pd.DataFrame],
    date_key: str,
) -> DailySummary:
    """Join the marine and forecast daily tables for a single date."""
    sunrise = daily_value(daily_forecast, date_key, SUNRISE)
    sunset = daily_value(daily_forecast, date_key, SUNSET)
    return DailySummary(
        date=date_key,
        max_wave_height=_optional_float(
            daily_value(daily_marine, date_key, WAVE_HEIGHT_MAX)
        ),
        max_wind_speed=_optional_float(
            daily_value(daily_forecast, date_key, WIND_SPEED_MAX)
        ),
        sunrise=None if sunrise is None else str(sunrise),
        sunset=None if sunset is None else str(sunset),
    )


def next_tide_event(
    events: Sequence[TideEvent], now: datetime.datetime
) -> Optional[TideEvent]:
    """Return the earliest event strictly after now, if any."""
    future = [event for event in events if event.time > now]
    if not future:
        return None
    return min(future, key=lambda event: event.time)


def trend_status(events: Sequence[TideEvent], now: datetime.datetime) -> TrendStatus:
    """Classify the tide as rising or falling at the given instant.

    The trend looks forward: water is rising toward a high and falling toward a
    low. Without a future event, the most recent past event decides instead.
    """
    upcoming = next_tide_event(events, now)
    if upcoming is not None:
        if upcoming.type == TideCategory.HIGH:
            return TrendStatus.RISING
        return TrendStatus.FALLING

    past = [event for event in events if event.time <= now]
    if not past:
        return TrendStatus.UNKNOWN
    last = max(past, key=lambda event: event.time)
    if last.type == TideCategory.HIGH:
        return TrendStatus.FALLING
    return TrendStatus.RISING


def aggregate_day(
    events: Sequence[TideEvent],
    daily_marine: Optional[pd.DataFrame],
    daily_forecast: Optional[pd.DataFrame],
    utc_offset_seconds: int,
    now: datetime.datetime,
    timezone: str = "",
) -> TideReport:
    """Build today's tide report for a location.

    Args:
        events: All tide events in the fetched window, in time order
        daily_marine: Daily marine table indexed by local date (wave_height_max)
        daily_forecast: Daily forecast table indexed by local date
            (wind_speed_10m_max, sunrise, sunset)
        utc_offset_seconds: The location's UTC offset
        now: Current instant. Naive values are taken as UTC.
        timezone: IANA timezone name of the location, for display

    Returns:
        A TideReport with today's highs and lows, the trend and the next tide
    """
    now = util.to_naive_utc(now)
    date_key = today_key(now, utc_offset_seconds)

    todays = [event for event in events if event.local_time.startswith(date_key)]
    upcoming = next_tide_event(events, now)

    return TideReport(
        high_tides=[e.local_time for e in todays if e.type == TideCategory.HIGH],
        low_tides=[e.local_time for e in todays if e.type == TideCategory.LOW],
        status=trend_status(events, now),
        next_tide=(
            NextTide(type=upcoming.type, time=upcoming.local_time)
            if upcoming is not None
            else None
        ),
        timezone=timezone,
        daily=daily_summary(daily_marine, daily_forecast, date_key),
    )
