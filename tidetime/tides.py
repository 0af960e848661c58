"""Tide report service.

Fetches the marine and forecast feeds for a location concurrently and turns them
into today's TideReport.
"""

import asyncio
import datetime
import logging
from typing import Optional

from tidetime import util
from tidetime.clients.openmeteo import OpenMeteoApi
from tidetime.core import daily, extrema
from tidetime.types import TideReport


async def get_tides(
    client: OpenMeteoApi,
    latitude: float,
    longitude: float,
    now: Optional[datetime.datetime] = None,
    location_code: str = "unknown",
) -> TideReport:
    """Return today's tides and conditions for a coordinate pair.

    Args:
        client: Open-Meteo API client
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        now: Current instant, defaults to the wall clock
        location_code: Optional label for logging

    Returns:
        Today's TideReport in the location's local time

    Raises:
        UpstreamFetchError: If either feed cannot be fetched
        InvalidInputError: If the sea level series is unusable
    """
    marine, forecast = await asyncio.gather(
        client.marine(latitude, longitude, location_code=location_code),
        client.forecast(latitude, longitude, location_code=location_code),
    )

    events = extrema.extract_tide_events(marine.samples(), marine.utc_offset_seconds)
    logging.info(
        f"[{location_code}] Found {len(events)} tide events in "
        f"{len(marine.hourly)} hourly samples ({marine.timezone})"
    )

    return daily.aggregate_day(
        events,
        marine.daily,
        forecast.daily,
        marine.utc_offset_seconds,
        now if now is not None else util.utc_now(),
        timezone=marine.timezone,
    )
