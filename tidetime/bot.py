"""Telegram bot command handling.

Commands:
    /start, /help      Welcome text
    /location <city>   Geocode a city and show the match
    <city>             Today's tides for a city
"""

import logging

from tidetime import messages, tides
from tidetime.clients.base import UpstreamFetchError
from tidetime.clients.nominatim import CityNotFoundError
from tidetime.clients.openmeteo import OpenMeteoApi
from tidetime.clients.telegram import TelegramApi, TelegramApiError, TelegramUpdate
from tidetime.core.extrema import InvalidInputError
from tidetime.geocoding import CityResolver

# Failures that are reported back to the user instead of propagating
USER_FACING_ERRORS = (
    UpstreamFetchError,
    CityNotFoundError,
    InvalidInputError,
    ValueError,
)


class TideBot:
    """Dispatches incoming chat messages to tide and geocoding lookups."""

    def __init__(
        self,
        telegram: TelegramApi,
        resolver: CityResolver,
        weather: OpenMeteoApi,
    ) -> None:
        self.telegram = telegram
        self.resolver = resolver
        self.weather = weather

    async def reply(self, chat_id: int, text: str, markdown: bool = False) -> None:
        await self.telegram.send_message(
            chat_id, text, parse_mode="Markdown" if markdown else None
        )

    async def handle_update(self, update: TelegramUpdate) -> None:
        """Handle a webhook update. Updates without message text are ignored."""
        message = update.message
        if message is None or message.text is None:
            return
        await self.handle_text(message.chat.id, message.text)

    async def handle_text(self, chat_id: int, text: str) -> None:
        if not text.startswith("/"):
            await self.tides_command(chat_id, text)
            return

        command, _, argument = text.partition(" ")
        # Group chats address commands as /command@botname
        command = command.split("@", 1)[0].lower()
        match command:
            case "/start" | "/help":
                await self.reply(chat_id, messages.WELCOME_MESSAGE)
            case "/location":
                await self.location_command(chat_id, argument)
            case _:
                logging.info(f"Ignoring unknown command {command!r}")

    async def location_command(self, chat_id: int, city: str) -> None:
        if not city.strip():
            await self.reply(chat_id, messages.LOCATION_USAGE)
            return

        await self.reply(chat_id, f'Searching for "{city}"...')
        try:
            coordinates = await self.resolver.resolve(city)
        except USER_FACING_ERRORS as e:
            logging.warning(f"Location lookup failed for {city!r}: {e}")
            await self.reply(chat_id, f"Error: {e}")
            return
        await self.reply(chat_id, messages.format_location(coordinates))

    async def tides_command(self, chat_id: int, city: str) -> None:
        await self.reply(chat_id, f"Searching for tides in {city}... 🔎")
        try:
            coordinates = await self.resolver.resolve(city)
            report = await tides.get_tides(
                self.weather,
                coordinates.latitude,
                coordinates.longitude,
                location_code=city.strip().lower(),
            )
        except USER_FACING_ERRORS as e:
            logging.warning(f"Tide lookup failed for {city!r}: {e}")
            await self.reply(chat_id, f"❌ Error: {e}")
            return

        await self.send_report(
            chat_id,
            messages.format_tide_report(
                report,
                coordinates.display_name,
                wind_speed_unit=self.weather.wind_speed_unit,
            ),
        )

    async def send_report(self, chat_id: int, text: str) -> None:
        """Send a Markdown report, falling back to plain text if Telegram rejects it."""
        try:
            await self.reply(chat_id, text, markdown=True)
        except TelegramApiError as e:
            logging.warning(f"Markdown report rejected for chat {chat_id}: {e}")
            await self.reply(chat_id, text)
