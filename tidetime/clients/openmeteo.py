"""Open-Meteo (marine and weather forecast) API client."""

# Standard library imports
import logging
from typing import Any, Literal, Optional, Sequence, TypedDict

# Third-party imports
import aiohttp
import pandas as pd
import pandera.errors
from pydantic import BaseModel, ConfigDict

# Local imports
from tidetime.dataframe_models import (
    DailyForecastDataModel,
    DailyMarineDataModel,
    HourlySeaLevelDataModel,
)
from tidetime.types import Sample
from .base import BaseApiClient, UpstreamDataError

WindSpeedUnit = Literal["kmh", "ms", "mph", "kn"]

HOURLY_SEA_LEVEL = "sea_level_height_msl"
MARINE_DAILY_FIELDS = ["wave_height_max"]
FORECAST_DAILY_FIELDS = ["wind_speed_10m_max", "sunrise", "sunset"]
# Daily fields holding local wall-clock strings rather than numbers
TIME_DAILY_FIELDS = {"sunrise", "sunset"}


class OpenMeteoRequestParams(TypedDict, total=False):
    """Parameters for Open-Meteo API requests."""

    latitude: float
    longitude: float
    hourly: str
    daily: str
    timezone: str
    past_days: int
    forecast_days: int
    wind_speed_unit: WindSpeedUnit


class OpenMeteoDataError(UpstreamDataError):
    """Error in data returned by the Open-Meteo API."""


class MarineData(BaseModel):
    """Marine feed for a location: hourly sea level and daily wave heights."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    timezone: str
    utc_offset_seconds: int
    # columns: time (local wall-clock string), sea_level (float)
    hourly: pd.DataFrame
    # index: date (YYYY-MM-DD), columns: wave_height_max
    daily: pd.DataFrame

    def samples(self) -> list[Sample]:
        """Return the hourly series as Samples, in feed order."""
        return [
            Sample(timestamp=t, height=float(h))
            for t, h in zip(self.hourly["time"], self.hourly["sea_level"])
        ]


class ForecastData(BaseModel):
    """Weather forecast feed for a location: daily wind and sun times."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    timezone: str
    utc_offset_seconds: int
    # index: date (YYYY-MM-DD), columns: wind_speed_10m_max, sunrise, sunset
    daily: pd.DataFrame


class OpenMeteoApi(BaseApiClient):
    """Client for the Open-Meteo marine and forecast APIs.

    API documentation: https://open-meteo.com/en/docs/marine-weather-api

    Both endpoints are queried with timezone=auto, so every timestamp in the
    responses is a local wall-clock string for the requested coordinates and the
    response carries the location's UTC offset.
    """

    MARINE_URL = "https://marine-api.open-meteo.com/v1/marine"
    FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        past_days: int = 1,
        forecast_days: int = 2,
        wind_speed_unit: WindSpeedUnit = "ms",
    ) -> None:
        """Initialize OpenMeteoApi with an aiohttp client session.

        Args:
            session: The aiohttp client session to use for requests
            past_days: Days of history to include before today
            forecast_days: Days of forecast to include, today included
            wind_speed_unit: Unit for wind speeds in the forecast feed
        """
        super().__init__(session=session)
        self.past_days = past_days
        self.forecast_days = forecast_days
        self.wind_speed_unit = wind_speed_unit

    @property
    def client_type(self) -> str:
        return "openmeteo"

    def _base_params(self, latitude: float, longitude: float) -> OpenMeteoRequestParams:
        return {
            "latitude": latitude,
            "longitude": longitude,
            "timezone": "auto",
            "past_days": self.past_days,
            "forecast_days": self.forecast_days,
        }

    async def _fetch(
        self, url: str, params: OpenMeteoRequestParams, location_code: str
    ) -> dict[str, Any]:
        """Fetch a payload and check for Open-Meteo's error envelope."""
        payload = await self._request("GET", url, params=params, location_code=location_code)
        if not isinstance(payload, dict):
            raise OpenMeteoDataError(f"Unexpected response type: {type(payload).__name__}")
        if payload.get("error"):
            reason = payload.get("reason", "unknown error")
            self.log(
                f"Open-Meteo API error: {reason}",
                level=logging.ERROR,
                location_code=location_code,
            )
            raise OpenMeteoDataError(reason)
        for key in ("timezone", "utc_offset_seconds"):
            if key not in payload:
                raise OpenMeteoDataError(f"Response is missing '{key}'")
        return payload

    async def marine(
        self,
        latitude: float,
        longitude: float,
        location_code: str = "unknown",
    ) -> MarineData:
        """Return the hourly sea level series and daily wave heights.

        Raises:
            OpenMeteoDataError: If the response is an error or is malformed
        """
        params = self._base_params(latitude, longitude)
        params["hourly"] = HOURLY_SEA_LEVEL
        params["daily"] = ",".join(MARINE_DAILY_FIELDS)

        self.log(
            f"Fetching marine data for ({latitude}, {longitude})",
            location_code=location_code,
        )
        payload = await self._fetch(self.MARINE_URL, params, location_code)

        hourly = payload.get("hourly")
        if not isinstance(hourly, dict) or "time" not in hourly:
            raise OpenMeteoDataError("Response is missing the hourly series")
        times = hourly["time"]
        heights = hourly.get(HOURLY_SEA_LEVEL)
        if heights is None:
            raise OpenMeteoDataError(f"Response is missing '{HOURLY_SEA_LEVEL}'")
        if len(times) != len(heights):
            raise OpenMeteoDataError(
                f"Hourly series length mismatch: {len(times)} times, {len(heights)} heights"
            )
        hourly_df = pd.DataFrame(
            {
                "time": pd.Series(times, dtype="object"),
                "sea_level": pd.Series(heights, dtype="float64"),
            }
        )

        return MarineData(
            timezone=payload["timezone"],
            utc_offset_seconds=int(payload["utc_offset_seconds"]),
            hourly=self._validate(HourlySeaLevelDataModel, hourly_df),
            daily=self._validate(
                DailyMarineDataModel,
                self._daily_frame(payload.get("daily"), MARINE_DAILY_FIELDS),
            ),
        )

    async def forecast(
        self,
        latitude: float,
        longitude: float,
        location_code: str = "unknown",
    ) -> ForecastData:
        """Return daily maximum wind speed, sunrise and sunset.

        Raises:
            OpenMeteoDataError: If the response is an error or is malformed
        """
        params = self._base_params(latitude, longitude)
        params["daily"] = ",".join(FORECAST_DAILY_FIELDS)
        params["wind_speed_unit"] = self.wind_speed_unit

        self.log(
            f"Fetching forecast data for ({latitude}, {longitude})",
            location_code=location_code,
        )
        payload = await self._fetch(self.FORECAST_URL, params, location_code)

        return ForecastData(
            timezone=payload["timezone"],
            utc_offset_seconds=int(payload["utc_offset_seconds"]),
            daily=self._validate(
                DailyForecastDataModel,
                self._daily_frame(payload.get("daily"), FORECAST_DAILY_FIELDS),
            ),
        )

    def _daily_frame(
        self, daily: Optional[dict[str, Any]], fields: Sequence[str]
    ) -> pd.DataFrame:
        """Build a daily table indexed by local date.

        A missing section or field yields nulls rather than an error; the day
        simply has no value for it.
        """
        daily = daily or {}
        dates = daily.get("time") or []
        columns = {}
        for field in fields:
            values = daily.get(field)
            if values is None or len(values) != len(dates):
                values = [None] * len(dates)
            dtype = "object" if field in TIME_DAILY_FIELDS else "float64"
            columns[field] = pd.Series(values, dtype=dtype)
        df = pd.DataFrame(columns)
        df.index = pd.Index(dates, dtype="object", name="date")
        return df

    def _validate(self, model: Any, df: pd.DataFrame) -> pd.DataFrame:
        try:
            return model.validate(df)
        except pandera.errors.SchemaError as e:
            raise OpenMeteoDataError(f"Unexpected data shape: {e}") from e
