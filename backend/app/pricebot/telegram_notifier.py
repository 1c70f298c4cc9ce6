"""Notifiers: Telegram Bot API delivery and a logging fallback."""

from __future__ import annotations

import logging

import httpx

from .errors import TransientDeliveryError
from .interface import Notifier

logger = logging.getLogger(__name__)


class TelegramNotifier(Notifier):
    """Notifier backed by the Telegram Bot API ``sendMessage`` method.

    ``destination`` is passed through as ``chat_id``; Telegram accepts a
    public channel handle such as ``@channel`` there, as long as the bot is
    an admin of the channel.
    """

    API_BASE = "https://api.telegram.org"

    def __init__(
        self,
        token: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not token:
            raise ValueError("Telegram bot token is required")
        self._token = token
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def send(self, destination: str, text: str) -> None:
        client = self._get_client()
        url = f"{self.API_BASE}/bot{self._token}/sendMessage"
        try:
            response = await client.post(url, json={"chat_id": destination, "text": text})
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TransientDeliveryError(
                f"Telegram request to {destination} failed: {self._redact(str(e))}",
                destination=destination,
            ) from e

        ok = isinstance(payload, dict) and payload.get("ok") is True
        if response.is_error or not ok:
            description = payload.get("description") if isinstance(payload, dict) else None
            reason = description or f"HTTP {response.status_code}"
            raise TransientDeliveryError(
                f"Telegram rejected message to {destination}: {reason}",
                destination=destination,
            )
        logger.debug("Delivered to %s via Telegram", destination)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._client

    def _redact(self, message: str) -> str:
        # httpx errors embed the request URL, which contains the token
        return message.replace(self._token, "***")


class LoggingNotifier(Notifier):
    """Development notifier: logs each message instead of delivering it."""

    async def send(self, destination: str, text: str) -> None:
        logger.info("[%s] %s", destination, text)
