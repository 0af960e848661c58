"""Telegram Bot API client and webhook payload models."""

from typing import Optional

import aiohttp
from pydantic import BaseModel, ConfigDict

from .base import BaseApiClient, UpstreamDataError


class TelegramApiError(UpstreamDataError):
    """The Bot API rejected a call."""


class TelegramChat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message_id: int
    chat: TelegramChat
    text: Optional[str] = None


class TelegramUpdate(BaseModel):
    """An incoming webhook update. Only plain messages are of interest."""

    model_config = ConfigDict(extra="ignore")

    update_id: int
    message: Optional[TelegramMessage] = None


class TelegramApi(BaseApiClient):
    """Minimal client for the Telegram Bot API."""

    BASE_URL = "https://api.telegram.org"

    def __init__(self, session: aiohttp.ClientSession, token: str) -> None:
        super().__init__(session=session)
        self._token = token

    @property
    def client_type(self) -> str:
        return "telegram"

    def _method_url(self, method: str) -> str:
        return f"{self.BASE_URL}/bot{self._token}/{method}"

    async def send_message(
        self, chat_id: int, text: str, parse_mode: Optional[str] = None
    ) -> None:
        """Send a text message to a chat.

        Raises:
            TelegramApiError: If the Bot API answers with ok=false
        """
        body: dict[str, object] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            body["parse_mode"] = parse_mode
        payload = await self._request("POST", self._method_url("sendMessage"), json=body)
        if not isinstance(payload, dict) or not payload.get("ok"):
            description = (
                payload.get("description") if isinstance(payload, dict) else payload
            )
            raise TelegramApiError(f"sendMessage failed: {description}")
