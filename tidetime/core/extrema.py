"""Tide event extraction from an hourly sea level series.

High and low tides are found as local extrema of the sampled heights. Because
hourly sampling under-resolves the true turning point, each extremum's time is
refined with a three-point parabola fit before being converted to an instant.
"""

import datetime
import math
from typing import Any, Sequence

import numpy as np

from tidetime import util
from tidetime.types import Sample, TideCategory, TideEvent

# Below this curvature the three points are treated as a line
FLAT_CURVATURE_EPSILON = 1e-10


class InvalidInputError(ValueError):
    """A sample violates the extractor's input contract."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid sample at index {index}: {reason}")


def vertex_offset(y1: float, y2: float, y3: float) -> float:
    """Offset in hours of the parabola vertex through three hourly points.

    The points are taken at t = -1, 0 and +1 hours around the middle sample.

    Args:
        y1: Height one hour before the middle sample
        y2: Height at the middle sample
        y3: Height one hour after the middle sample

    Returns:
        Offset from the middle sample's time, in hours. 0.0 for linear or flat points.
    """
    a = (y1 + y3) / 2 - y2
    b = (y3 - y1) / 2
    if abs(a) < FLAT_CURVATURE_EPSILON:
        return 0.0
    return -b / (2 * a)


def _validate(samples: Sequence[Sample]) -> tuple[list[datetime.datetime], Any]:
    """Parse timestamps and heights, failing on the first bad sample."""
    times = []
    for index, sample in enumerate(samples):
        try:
            times.append(util.parse_local_time(sample.timestamp))
        except ValueError as e:
            raise InvalidInputError(index, str(e)) from e
        if not math.isfinite(sample.height):
            raise InvalidInputError(index, f"non-finite height {sample.height!r}")
    heights = np.asarray([sample.height for sample in samples], dtype=float)
    return times, heights


def classify_extrema(heights: Any) -> list[tuple[int, TideCategory]]:
    """Find the interior indices that are local highs or lows.

    A strict rise into the point and a non-strict fall out of it is a high (and
    the mirror image a low), so a plateau is flagged once, at its first sample.
    A run of equal heights is never flagged.
    """
    h = np.asarray(heights, dtype=float)
    if len(h) < 3:
        return []
    prev, curr, nxt = h[:-2], h[1:-1], h[2:]
    is_high = (curr > prev) & (curr >= nxt)
    is_low = (curr < prev) & (curr <= nxt)

    extrema = []
    for i in np.flatnonzero(is_high | is_low):
        category = TideCategory.HIGH if is_high[i] else TideCategory.LOW
        extrema.append((int(i) + 1, category))
    return extrema


def extract_tide_events(
    samples: Sequence[Sample], utc_offset_seconds: int
) -> list[TideEvent]:
    """Extract high and low tide events from an hourly sea level series.

    Args:
        samples: Contiguous hourly samples in time order, local wall-clock timestamps
        utc_offset_seconds: The location's UTC offset, constant for the whole series

    Returns:
        Tide events in series order. Empty when fewer than three samples are given.

    Raises:
        InvalidInputError: If a timestamp is malformed or a height is not finite
    """
    if len(samples) < 3:
        return []

    times, heights = _validate(samples)

    events = []
    for i, category in classify_extrema(heights):
        offset_hours = vertex_offset(heights[i - 1], heights[i], heights[i + 1])
        refined = times[i] + datetime.timedelta(hours=offset_hours)
        # Reported times have minute resolution
        refined = refined.replace(second=0, microsecond=0)
        events.append(
            TideEvent(
                time=util.local_to_utc(refined, utc_offset_seconds),
                local_time=util.format_local_time(refined),
                type=category,
                height=float(heights[i]),
            )
        )
    return events
