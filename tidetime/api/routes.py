"""API handlers for the tidetime application.

This module contains the FastAPI route handlers for the JSON API and the
Telegram webhook. Clients and the bot live in app.state and are created by the
application lifespan (see tidetime.main).
"""

# Standard library imports
import logging
import secrets
from typing import Annotated, Any

# Third-party imports
import fastapi
from fastapi import Header, HTTPException, Query

# Local imports
from tidetime import tides
from tidetime.clients.base import UpstreamFetchError
from tidetime.clients.nominatim import CityNotFoundError
from tidetime.clients.telegram import TelegramUpdate
from tidetime.core.extrema import InvalidInputError
from tidetime.types import CityTides, Coordinates, TideReport


async def _resolve_city(app: fastapi.FastAPI, city: str) -> Coordinates:
    """Resolve a city, mapping lookup failures onto HTTP errors."""
    try:
        return await app.state.resolver.resolve(city)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except CityNotFoundError as e:
        logging.warning(f"City not found: {city!r}")
        raise HTTPException(status_code=404, detail=str(e)) from e
    except UpstreamFetchError as e:
        logging.error(f"Geocoding failed for {city!r}: {e}")
        raise HTTPException(status_code=502, detail=f"Geocoding API error: {e}") from e


async def _tide_report(
    app: fastapi.FastAPI, latitude: float, longitude: float, location_code: str
) -> TideReport:
    """Build a tide report, mapping upstream failures onto HTTP errors."""
    try:
        return await tides.get_tides(
            app.state.weather_client,
            latitude,
            longitude,
            location_code=location_code,
        )
    except UpstreamFetchError as e:
        logging.error(f"[{location_code}] Tide API error: {e}")
        raise HTTPException(status_code=502, detail=f"Tide API error: {e}") from e
    except InvalidInputError as e:
        logging.error(f"[{location_code}] Unusable sea level series: {e}")
        raise HTTPException(
            status_code=502, detail=f"Tide API returned unusable data: {e}"
        ) from e


def register_routes(app: fastapi.FastAPI) -> None:
    """Register API routes with the FastAPI application.

    Args:
        app: The FastAPI application
    """

    @app.get("/api/tides", response_model=TideReport)
    async def tides_at(
        latitude: Annotated[float, Query(ge=-90, le=90)],
        longitude: Annotated[float, Query(ge=-180, le=180)],
    ) -> TideReport:
        """Today's tides and conditions for a coordinate pair."""
        location_code = f"{latitude:.3f},{longitude:.3f}"
        logging.info(f"[{location_code}] Processing tides request")
        return await _tide_report(app, latitude, longitude, location_code)

    @app.get("/api/geocode", response_model=Coordinates)
    async def geocode(city: Annotated[str, Query(min_length=1)]) -> Coordinates:
        """Resolve a city name to coordinates."""
        return await _resolve_city(app, city)

    @app.get("/api/cities/{city}/tides", response_model=CityTides)
    async def city_tides(city: str) -> CityTides:
        """Today's tides and conditions for a city."""
        logging.info(f"[{city}] Processing city tides request")
        coordinates = await _resolve_city(app, city)
        report = await _tide_report(
            app, coordinates.latitude, coordinates.longitude, city.strip().lower()
        )
        return CityTides(location=coordinates, tides=report)

    @app.post("/api/telegram/webhook")
    async def telegram_webhook(
        update: TelegramUpdate,
        secret_token: Annotated[
            str | None, Header(alias="X-Telegram-Bot-Api-Secret-Token")
        ] = None,
    ) -> dict[str, Any]:
        """Receive a Telegram update and answer it through the bot."""
        bot = getattr(app.state, "bot", None)
        if bot is None:
            logging.warning("Webhook called but no bot token is configured")
            raise HTTPException(status_code=503, detail="Bot is not configured")

        expected = app.state.config.webhook_secret
        if expected and not secrets.compare_digest(secret_token or "", expected):
            logging.warning(f"Rejected webhook update {update.update_id}: bad secret")
            raise HTTPException(status_code=403, detail="Invalid secret token")

        # Telegram redelivers any update not answered with 200
        try:
            await bot.handle_update(update)
        except UpstreamFetchError as e:
            logging.error(f"Could not answer update {update.update_id}: {e}")
            return {"ok": False}
        return {"ok": True}
