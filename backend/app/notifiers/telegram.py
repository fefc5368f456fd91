"""Telegram Bot API notifier."""

import logging

import httpx

from app.notifiers.base import HttpNotifier, format_signal_message
from core.errors import DeliveryError
from core.models import Signal, StrategyConfig

logger = logging.getLogger(__name__)


class TelegramNotifier(HttpNotifier):
    """Send alerts to a Telegram chat via ``sendMessage``."""

    name = "telegram"
    API_URL = "https://api.telegram.org"

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.bot_token = bot_token
        self.chat_id = chat_id

    async def send_text(self, text: str) -> None:
        response = await self._post_json(
            f"{self.API_URL}/bot{self.bot_token}/sendMessage",
            {
                "chat_id": self.chat_id,
                "text": text,
                "parse_mode": "Markdown",
                "disable_web_page_preview": True,
            },
        )
        try:
            body = response.json()
        except ValueError as e:
            raise DeliveryError("[telegram] invalid JSON response") from e
        if not isinstance(body, dict):
            raise DeliveryError(f"[telegram] unexpected response: {body!r}")
        if not body.get("ok", False):
            raise DeliveryError(
                f"[telegram] API error: {body.get('description', 'unknown')}"
            )

    async def deliver(self, signal: Signal, config: StrategyConfig) -> None:
        await self.send_text(format_signal_message(signal, config))
        logger.info(
            f"Telegram alert sent: {signal.direction.value} signal for {signal.symbol}"
        )
