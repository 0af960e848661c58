"""Utility functions for tests."""

import datetime
import json
from typing import Any, Optional, Sequence

import pandas as pd

from tidetime.types import Sample


def assert_json_serializable(obj: Any) -> None:
    """Assert that an object is JSON serializable.

    Args:
        obj: The object to check for JSON serializability.

    Raises:
        AssertionError: If the object is not JSON serializable.
    """
    try:
        json.dumps(obj)
    except (TypeError, ValueError) as e:
        raise AssertionError(f"Object is not JSON serializable: {e}") from e


def hourly_samples(start: str, heights: Sequence[float]) -> list[Sample]:
    """Build contiguous hourly samples starting at a local wall-clock time."""
    t0 = datetime.datetime.strptime(start, "%Y-%m-%dT%H:%M")
    return [
        Sample(
            timestamp=(t0 + datetime.timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M"),
            height=h,
        )
        for i, h in enumerate(heights)
    ]


def daily_table(dates: Sequence[str], **columns: Sequence[Optional[Any]]) -> pd.DataFrame:
    """Build a daily table indexed by local date, as the Open-Meteo client does."""
    df = pd.DataFrame({name: list(values) for name, values in columns.items()})
    df.index = pd.Index(list(dates), dtype="object", name="date")
    return df
