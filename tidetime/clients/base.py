"""Base class for API clients."""

import abc
import asyncio
import logging
from typing import Any, Mapping, Optional

import aiohttp


class UpstreamFetchError(Exception):
    """Base exception for all upstream API client errors."""


class UpstreamConnectionError(UpstreamFetchError):
    """The upstream API could not be reached or answered with an HTTP error."""


class UpstreamDataError(UpstreamFetchError):
    """The upstream API reported an error or returned data that cannot be used."""


class BaseApiClient(abc.ABC):
    """Abstract base class for API clients."""

    _session: aiohttp.ClientSession

    MAX_RETRIES = 3
    RETRY_DELAY = 1  # seconds

    @property
    @abc.abstractmethod
    def client_type(self) -> str:
        """Return the string identifier for the client type (e.g., 'openmeteo')."""
        raise NotImplementedError

    def __init__(self, session: aiohttp.ClientSession) -> None:
        """Initialize the base client with an aiohttp session.

        Args:
            session: The aiohttp client session to use for requests.
        """
        self._session = session

    def log(
        self,
        message: str,
        level: int = logging.INFO,
        location_code: Optional[str] = None,
    ) -> None:
        """Log a message, automatically prepending client type and optional location code."""
        client_tag = self.client_type
        if location_code:
            prefix = f"[{location_code}][{client_tag}]"
        else:
            prefix = f"[{client_tag}]"
        formatted_message = f"{prefix} {message}"
        logging.log(level, formatted_message)

    async def _execute_request(
        self,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Make a single HTTP request and return the decoded JSON body.

        Raises:
            UpstreamConnectionError: If the response status is not 200
            aiohttp.ClientError: On transport failures
        """
        async with self._session.request(
            method, url, params=params, json=json, headers=headers
        ) as response:
            if response.status != 200:
                body = await response.text()
                raise UpstreamConnectionError(
                    f"HTTP error: {response.status} {body[:200]}".strip()
                )
            return await response.json(content_type=None)

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
        location_code: Optional[str] = None,
    ) -> Any:
        """Make a request, retrying transport failures.

        Raises:
            UpstreamConnectionError: If the API cannot be reached after all retries,
                or answers with an HTTP error
        """
        attempt = 0
        while True:
            attempt += 1
            self.log(
                f"{method} {url} (attempt {attempt})",
                level=logging.DEBUG,
                location_code=location_code,
            )
            try:
                return await self._execute_request(
                    method, url, params=params, json=json, headers=headers
                )
            except UpstreamConnectionError as e:
                self.log(str(e), level=logging.ERROR, location_code=location_code)
                raise
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt >= self.MAX_RETRIES:
                    error_msg = f"Failed to connect to {self.client_type} API: {e!r}"
                    self.log(error_msg, level=logging.ERROR, location_code=location_code)
                    raise UpstreamConnectionError(error_msg) from e
                await asyncio.sleep(self.RETRY_DELAY * attempt)
