# noqa

from .base import (
    BaseApiClient,
    UpstreamConnectionError,
    UpstreamDataError,
    UpstreamFetchError,
)
from .nominatim import CityNotFoundError, NominatimApi
from .openmeteo import OpenMeteoApi, OpenMeteoDataError
from .telegram import TelegramApi, TelegramApiError

__all__ = [
    "BaseApiClient",
    "CityNotFoundError",
    "NominatimApi",
    "OpenMeteoApi",
    "OpenMeteoDataError",
    "TelegramApi",
    "TelegramApiError",
    "UpstreamConnectionError",
    "UpstreamDataError",
    "UpstreamFetchError",
]
