"""OpenStreetMap Nominatim geocoding API client."""

from typing import Any

import aiohttp

from tidetime.types import Coordinates
from .base import BaseApiClient, UpstreamDataError


class CityNotFoundError(LookupError):
    """The geocoder has no match for the requested city."""


class NominatimApi(BaseApiClient):
    """Client for the Nominatim search API.

    Nominatim's usage policy requires an identifying User-Agent on every request.
    """

    SEARCH_URL = "https://nominatim.openstreetmap.org/search"

    def __init__(
        self, session: aiohttp.ClientSession, user_agent: str = "TideTimeBot/1.0"
    ) -> None:
        super().__init__(session=session)
        self.user_agent = user_agent

    @property
    def client_type(self) -> str:
        return "nominatim"

    async def search(self, city: str) -> Coordinates:
        """Return the coordinates of the best match for a city name.

        Raises:
            CityNotFoundError: If there is no match
            UpstreamDataError: If the response cannot be parsed
        """
        self.log(f"Searching for {city!r}")
        payload = await self._request(
            "GET",
            self.SEARCH_URL,
            params={"q": city, "format": "json", "limit": 1},
            headers={"User-Agent": self.user_agent},
        )
        if not isinstance(payload, list):
            raise UpstreamDataError(f"Unexpected geocoder response: {payload!r:.200}")
        if not payload:
            raise CityNotFoundError(f'City "{city}" not found.')
        return self._parse_result(payload[0])

    def _parse_result(self, result: dict[str, Any]) -> Coordinates:
        try:
            return Coordinates(
                latitude=float(result["lat"]),
                longitude=float(result["lon"]),
                display_name=result["display_name"],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamDataError(f"Malformed geocoder result: {e}") from e
