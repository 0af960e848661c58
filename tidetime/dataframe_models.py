"""Pandera DataFrame models for validating feed data structures.

String fields are coerced, so they validate against the string dtype of the
installed pandas version.
"""

import pandas as pd
import pandera.pandas as pa
import pandera.typing as pa_typing

# Local calendar date keys, as used by the daily tables
DATE_KEY_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class HourlySeaLevelDataModel(pa.DataFrameModel):
    """Pandera DataFrameModel for the hourly sea level series."""

    time: pa_typing.Series[str] = pa.Field(nullable=False, unique=True, coerce=True)
    # Nulls pass here; the tide extractor reports them with their position
    sea_level: pa_typing.Series[float] = pa.Field(nullable=True)

    @pa.check("time", error="Timestamps not sorted")
    def check_time_sorted(cls, series: pd.Series) -> bool:
        return bool(series.is_monotonic_increasing)

    class Config:
        """Pandera model configuration."""

        strict = True  # Disallow columns not specified in the schema
        coerce = False


class DailyDataModel(pa.DataFrameModel):
    """Base model for daily tables keyed by local calendar date."""

    date: pa_typing.Index[str] = pa.Field(
        nullable=False,
        unique=True,
        str_matches=DATE_KEY_PATTERN,
        check_name=True,
        coerce=True,
    )

    class Config:
        """Pandera model configuration."""

        strict = True
        coerce = False


class DailyMarineDataModel(DailyDataModel):
    wave_height_max: pa_typing.Series[float] = pa.Field(nullable=True)


class DailyForecastDataModel(DailyDataModel):
    wind_speed_10m_max: pa_typing.Series[float] = pa.Field(nullable=True)
    sunrise: pa_typing.Series[str] = pa.Field(nullable=True, coerce=True)
    sunset: pa_typing.Series[str] = pa.Field(nullable=True, coerce=True)
