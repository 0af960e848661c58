"""City name resolution with a flat-file cache.

Resolved coordinates are stored in a JSON file keyed by the normalized city name.
Entries are never changed once written, so concurrent writers can only race to
store the same value and no locking is done.
"""

# Standard library imports
import json
import logging
from pathlib import Path
from typing import Optional

# Third-party imports
import pydantic

# Local imports
from tidetime.clients.nominatim import NominatimApi
from tidetime.types import Coordinates


def normalize_city(city: str) -> str:
    """Normalize a city name for use as a cache key."""
    return city.strip().lower()


class CityCache:
    """JSON file mapping normalized city names to coordinates."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, dict[str, object]]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logging.warning(f"Ignoring unreadable city cache {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logging.warning(f"Ignoring malformed city cache {self.path}")
            return {}
        return data

    def get(self, city: str) -> Optional[Coordinates]:
        """Return cached coordinates for a city, or None."""
        entry = self._load().get(normalize_city(city))
        if entry is None:
            return None
        try:
            return Coordinates.model_validate(entry)
        except pydantic.ValidationError as e:
            logging.warning(f"Ignoring malformed cache entry for {city!r}: {e}")
            return None

    def put(self, city: str, coordinates: Coordinates) -> None:
        """Store coordinates for a city, rewriting the whole file."""
        data = self._load()
        data[normalize_city(city)] = coordinates.model_dump()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            # A lost entry only costs a repeat lookup
            logging.warning(f"Could not write city cache {self.path}: {e}")


class CityResolver:
    """Resolves city names to coordinates, consulting the cache first."""

    def __init__(self, client: NominatimApi, cache: CityCache) -> None:
        self.client = client
        self.cache = cache

    async def resolve(self, city: str) -> Coordinates:
        """Return the coordinates of a city.

        Raises:
            ValueError: If the city name is blank
            CityNotFoundError: If the geocoder has no match
            UpstreamFetchError: If the geocoder cannot be reached
        """
        if not city or not city.strip():
            raise ValueError("Please provide a city name.")

        cached = self.cache.get(city)
        if cached is not None:
            logging.info(f"City cache hit for {normalize_city(city)!r}")
            return cached

        coordinates = await self.client.search(city.strip())
        self.cache.put(city, coordinates)
        return coordinates
