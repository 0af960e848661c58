#!/usr/bin/env python3
"""
tidetime - FastAPI web application serving tide times

This module contains the FastAPI application that serves today's tides for a
location as JSON, and answers the Telegram bot through its webhook.
"""

# Standard library imports
import contextlib
import logging
import os
import signal
from typing import Any, AsyncGenerator

# Third-party imports
import aiohttp
import fastapi
import uvicorn

# Local imports
from tidetime import api, config, logging_utils
from tidetime.bot import TideBot
from tidetime.clients.nominatim import NominatimApi
from tidetime.clients.openmeteo import OpenMeteoApi
from tidetime.clients.telegram import TelegramApi
from tidetime.geocoding import CityCache, CityResolver


@contextlib.asynccontextmanager
async def lifespan(app: fastapi.FastAPI) -> AsyncGenerator[None, None]:
    """Create the shared HTTP session and the API clients.

    Args:
        app: The FastAPI application instance

    Yields:
        None when setup is complete
    """
    cfg = config.from_env()
    app.state.config = cfg

    timeout = aiohttp.ClientTimeout(total=cfg.request_timeout)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        app.state.weather_client = OpenMeteoApi(
            session,
            past_days=cfg.past_days,
            forecast_days=cfg.forecast_days,
            wind_speed_unit=cfg.wind_speed_unit,
        )
        app.state.resolver = CityResolver(
            NominatimApi(session, user_agent=cfg.user_agent),
            CityCache(cfg.cities_cache_path),
        )
        if cfg.bot_token:
            app.state.bot = TideBot(
                TelegramApi(session, cfg.bot_token),
                app.state.resolver,
                app.state.weather_client,
            )
            logging.info("Telegram webhook enabled")
        else:
            app.state.bot = None
            logging.warning("BOT_TOKEN is not set, Telegram webhook disabled")

        yield

        # Shutdown handling
        logging.info("-----------------------------------------------")
        logging.info("Shutting down app")


app = fastapi.FastAPI(lifespan=lifespan)

# Register API routes
api.register_routes(app)


def setup_signal_handlers() -> None:
    """Set up signal handlers to log when specific signals are received.

    Note: Only registers a handler for SIGTERM, as handling SIGINT would
    interfere with the default Ctrl+C behavior that uvicorn relies on.
    """
    original_sigterm_handler = signal.getsignal(signal.SIGTERM)

    def sigterm_handler(sig: int, frame: Any) -> None:
        logging.warning("Received SIGTERM signal, beginning shutdown")

        # Call original handler if it was a callable
        if callable(original_sigterm_handler):
            original_sigterm_handler(sig, frame)

    signal.signal(signal.SIGTERM, sigterm_handler)


def start_app() -> fastapi.FastAPI:
    """Initialize and return the FastAPI application.

    Sets up logging based on the environment (Google Cloud Run or local).

    Returns:
        Configured FastAPI application instance
    """
    logging_utils.setup_logging()

    logging.info("***********************************************")
    logging.info("Starting app")

    setup_signal_handlers()

    return app


if __name__ == "__main__":
    uvicorn.run(
        "tidetime.main:start_app",
        factory=True,
        host="0.0.0.0",
        port=int(os.environ.get("PORT", 8080)),
        log_level="info",
    )
