"""Type definitions for tidetime.

This module contains type definitions used throughout the application, separated into
two main categories:
1. Internal types - Used while extracting and aggregating tide events
2. API types - Returned by the HTTP API and consumed by the message formatter
"""

# Standard library imports
import datetime
import enum
from typing import List, Optional

# Third-party imports
from pydantic import BaseModel, Field, ConfigDict


#############################################################
# INTERNAL TYPES - Used for internal data processing         #
#############################################################


class TideCategory(enum.Enum):
    LOW = "low"
    HIGH = "high"


class TrendStatus(enum.Enum):
    """Direction the water level is heading, relative to now."""

    RISING = "rising"
    FALLING = "falling"
    # Only when the fetched window holds no tide event at all
    UNKNOWN = "unknown"


class Sample(BaseModel):
    """A single hourly sea level reading (internal representation)."""

    model_config = ConfigDict(frozen=True)

    timestamp: str  # Local wall-clock time, "YYYY-MM-DDTHH:MM", no zone suffix
    height: float  # Sea level height, units fixed by the feed


class TideEvent(BaseModel):
    """Information about a single detected tide event (internal representation)."""

    model_config = ConfigDict(frozen=True)

    time: datetime.datetime  # Absolute instant, naive UTC
    local_time: str  # Refined local wall-clock time, "YYYY-MM-DDTHH:MM"
    type: TideCategory  # TideCategory.LOW or TideCategory.HIGH
    height: float  # Sampled height at the extremum


#############################################################
# API TYPES - Used for external API request/response models  #
#############################################################


class Coordinates(BaseModel):
    """Geocoded location for a city name."""

    model_config = ConfigDict(extra="forbid")

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")
    display_name: str = Field(
        ..., description="Full place name as returned by the geocoder"
    )


class DailySummary(BaseModel):
    """Marine and astronomical summary for a single local calendar day."""

    model_config = ConfigDict(extra="forbid")

    date: str = Field(..., description="Local calendar date (YYYY-MM-DD)")
    max_wave_height: Optional[float] = Field(
        None, description="Maximum wave height for the day, if reported"
    )
    max_wind_speed: Optional[float] = Field(
        None, description="Maximum 10m wind speed for the day, if reported"
    )
    sunrise: Optional[str] = Field(
        None, description="Sunrise as a local wall-clock time (YYYY-MM-DDTHH:MM)"
    )
    sunset: Optional[str] = Field(
        None, description="Sunset as a local wall-clock time (YYYY-MM-DDTHH:MM)"
    )


class NextTide(BaseModel):
    """The next upcoming tide event."""

    model_config = ConfigDict(extra="forbid")

    type: TideCategory = Field(..., description="Type of tide ('high' or 'low')")
    time: str = Field(
        ..., description="Local wall-clock time of the tide (YYYY-MM-DDTHH:MM)"
    )


class TideReport(BaseModel):
    """Today's tides and conditions for a location."""

    model_config = ConfigDict(extra="forbid")

    high_tides: List[str] = Field(
        default_factory=list,
        description="Local times of today's high tides, ascending",
    )
    low_tides: List[str] = Field(
        default_factory=list,
        description="Local times of today's low tides, ascending",
    )
    status: TrendStatus = Field(
        ..., description="Whether the tide is currently rising or falling"
    )
    next_tide: Optional[NextTide] = Field(
        None, description="Next tide after now, if inside the fetched window"
    )
    timezone: str = Field(..., description="IANA timezone name of the location")
    daily: DailySummary = Field(..., description="Today's daily summary")


class CityTides(BaseModel):
    """Complete response for the city tides endpoint."""

    model_config = ConfigDict(extra="forbid")

    location: Coordinates
    tides: TideReport
