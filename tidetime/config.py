"""Application configuration.

All settings come from environment variables and are collected into a frozen
AppConfig. Invalid values fail at startup with a pydantic ValidationError.

Environment variables:
    BOT_TOKEN            Telegram bot token. Without it the webhook is disabled.
    WEBHOOK_SECRET       Expected X-Telegram-Bot-Api-Secret-Token header value
    CITIES_CACHE_PATH    JSON file for geocoding results
    PAST_DAYS            Days of history fetched before today
    FORECAST_DAYS        Days of forecast fetched, today included
    WIND_SPEED_UNIT      kmh, ms, mph or kn
    GEOCODER_USER_AGENT  User-Agent sent to Nominatim
    REQUEST_TIMEOUT      Total timeout for a single upstream request, in seconds
"""

# Standard library imports
import os
from pathlib import Path
from typing import Annotated, Any, Mapping, Optional

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field

# Local imports
from tidetime.clients.openmeteo import WindSpeedUnit

# Environment variable name for each AppConfig field
ENV_VARS = {
    "bot_token": "BOT_TOKEN",
    "webhook_secret": "WEBHOOK_SECRET",
    "cities_cache_path": "CITIES_CACHE_PATH",
    "past_days": "PAST_DAYS",
    "forecast_days": "FORECAST_DAYS",
    "wind_speed_unit": "WIND_SPEED_UNIT",
    "user_agent": "GEOCODER_USER_AGENT",
    "request_timeout": "REQUEST_TIMEOUT",
}


class AppConfig(BaseModel, frozen=True):
    """Runtime configuration for the tide service and bot."""

    model_config = ConfigDict(extra="forbid")

    bot_token: Annotated[
        Optional[str],
        Field(description="Telegram bot token; the webhook is disabled without it"),
    ] = None

    webhook_secret: Annotated[
        Optional[str],
        Field(description="Secret token Telegram must echo on webhook calls"),
    ] = None

    cities_cache_path: Annotated[
        Path,
        Field(description="JSON file caching geocoded city coordinates"),
    ] = Path("cities_cache.json")

    past_days: Annotated[
        int,
        Field(ge=0, le=92, description="Days of history fetched before today"),
    ] = 1

    forecast_days: Annotated[
        int,
        Field(ge=1, le=16, description="Days of forecast fetched, today included"),
    ] = 2

    wind_speed_unit: Annotated[
        WindSpeedUnit,
        Field(description="Unit for maximum wind speed"),
    ] = "ms"

    user_agent: Annotated[
        str,
        Field(min_length=1, description="User-Agent sent to the geocoder"),
    ] = "TideTimeBot/1.0"

    request_timeout: Annotated[
        float,
        Field(gt=0, description="Total timeout per upstream request, in seconds"),
    ] = 30.0

    @property
    def webhook_enabled(self) -> bool:
        return bool(self.bot_token)


def from_env(environ: Mapping[str, str] = os.environ) -> AppConfig:
    """Build the configuration from environment variables.

    Unset or empty variables keep their defaults.
    """
    values: dict[str, Any] = {}
    for field, var in ENV_VARS.items():
        value = environ.get(var)
        if value:
            values[field] = value
    return AppConfig.model_validate(values)
