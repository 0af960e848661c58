"""Tests for the tide report service."""

import datetime
from unittest.mock import AsyncMock, MagicMock

import pandas as pd
import pytest
from freezegun import freeze_time

from tests.helpers import daily_table, hourly_samples
from tidetime import tides
from tidetime.clients.base import UpstreamConnectionError
from tidetime.clients.openmeteo import ForecastData, MarineData, OpenMeteoApi
from tidetime.core.extrema import InvalidInputError
from tidetime.types import TideCategory, TrendStatus

HEIGHTS = [0.5, 1.0, 1.9, 2.0, 1.6, 0.9, 0.3, 0.6, 1.2]


def make_marine(heights: list[float], offset: int = 3600) -> MarineData:
    samples = hourly_samples("2024-06-01T00:00", heights)
    return MarineData(
        timezone="Europe/London",
        utc_offset_seconds=offset,
        hourly=pd.DataFrame(
            {
                "time": [s.timestamp for s in samples],
                "sea_level": [s.height for s in samples],
            }
        ),
        daily=daily_table(["2024-06-01"], wave_height_max=[1.3]),
    )


def make_forecast(offset: int = 3600) -> ForecastData:
    return ForecastData(
        timezone="Europe/London",
        utc_offset_seconds=offset,
        daily=daily_table(
            ["2024-06-01"],
            wind_speed_10m_max=[4.2],
            sunrise=["2024-06-01T04:43"],
            sunset=["2024-06-01T21:13"],
        ),
    )


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock(spec=OpenMeteoApi)
    client.marine = AsyncMock(return_value=make_marine(HEIGHTS))
    client.forecast = AsyncMock(return_value=make_forecast())
    return client


@pytest.mark.asyncio
async def test_get_tides(mock_client: MagicMock) -> None:
    # 04:30 local at UTC+1
    now = datetime.datetime(2024, 6, 1, 3, 30)
    report = await tides.get_tides(mock_client, 50.1, -5.5, now=now)

    mock_client.marine.assert_awaited_once()
    mock_client.forecast.assert_awaited_once()
    assert mock_client.marine.call_args.args == (50.1, -5.5)

    assert report.high_tides == ["2024-06-01T02:42"]
    assert report.low_tides == ["2024-06-01T06:10"]
    assert report.status == TrendStatus.FALLING
    assert report.next_tide is not None
    assert report.next_tide.type == TideCategory.LOW
    assert report.next_tide.time == "2024-06-01T06:10"
    assert report.timezone == "Europe/London"
    assert report.daily.max_wave_height == 1.3
    assert report.daily.max_wind_speed == 4.2
    assert report.daily.sunrise == "2024-06-01T04:43"
    assert report.daily.sunset == "2024-06-01T21:13"


@pytest.mark.asyncio
@freeze_time("2024-06-01 06:00:00")
async def test_get_tides_defaults_to_wall_clock(mock_client: MagicMock) -> None:
    # 07:00 local, after the 06:10 low
    report = await tides.get_tides(mock_client, 50.1, -5.5)

    assert report.next_tide is None
    assert report.status == TrendStatus.RISING


@pytest.mark.asyncio
async def test_upstream_failure_propagates(mock_client: MagicMock) -> None:
    mock_client.forecast.side_effect = UpstreamConnectionError("HTTP error: 503")

    with pytest.raises(UpstreamConnectionError):
        await tides.get_tides(mock_client, 50.1, -5.5)


@pytest.mark.asyncio
async def test_null_height_is_reported(mock_client: MagicMock) -> None:
    heights = list(HEIGHTS)
    heights[4] = float("nan")
    mock_client.marine.return_value = make_marine(heights)

    with pytest.raises(InvalidInputError) as exc_info:
        await tides.get_tides(mock_client, 50.1, -5.5)
    assert exc_info.value.index == 4
