"""Shared notifier plumbing: message formatting and an HTTP base class."""

import logging
from typing import Any

import httpx

from core.errors import DeliveryError
from core.models import Direction, Signal, StrategyConfig

logger = logging.getLogger(__name__)


def format_signal_message(signal: Signal, config: StrategyConfig) -> str:
    """Build the chat alert text for a signal (Telegram-style Markdown)."""
    emoji = "🟢" if signal.direction == Direction.BUY else "🔴"
    arrow = "📈" if signal.direction == Direction.BUY else "📉"
    time_str = signal.signal_time.strftime("%Y-%m-%d %H:%M:%S UTC")

    return "\n".join([
        f"{emoji} *CRYPTO SCALPING SIGNAL* {emoji}",
        "",
        f"{arrow} *{signal.direction.value} SIGNAL*",
        f"💰 *Pair:* {signal.symbol}",
        f"⏰ *Time:* {time_str}",
        "",
        f"📊 *Entry Price:* ${signal.entry_price:.6f}",
        f"🎯 *Take Profit:* ${signal.take_profit:.6f}",
        f"🛑 *Stop Loss:* ${signal.stop_loss:.6f}",
        "",
        f"📈 *MA({config.fast_period}):* {signal.fast_ma:.6f}",
        f"📉 *MA({config.slow_period}):* {signal.slow_ma:.6f}",
        "",
        f"💡 *Risk/Reward:* 1:{config.risk_reward_ratio}",
        f"📊 *Timeframe:* {signal.timeframe}",
        "",
        "⚡ _Trade at your own risk!_",
    ])


def format_start_message(config: StrategyConfig) -> str:
    """Build the text announced when the bot starts."""
    return "\n".join([
        "🤖 *Crypto Scalping Bot Started*",
        "",
        f"📊 Monitoring: {config.symbol}",
        f"⏰ Timeframe: {config.timeframe}",
        f"📈 Strategy: MA({config.fast_period}) / MA({config.slow_period}) Crossover",
        f"💰 Risk/Reward: 1:{config.risk_reward_ratio}",
        "",
        f"🔄 Checking market every {config.poll_interval:g} seconds...",
    ])


STOP_MESSAGE = "🛑 *Crypto Scalping Bot Stopped*"


class HttpNotifier:
    """Base class for notifiers that POST JSON over HTTP."""

    name = "http"

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _post_json(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        """POST a JSON payload, raising DeliveryError on any failure."""
        client = await self._get_client()
        try:
            response = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise DeliveryError(f"[{self.name}] request failed: {e!r}") from e

        if response.status_code >= 400:
            raise DeliveryError(
                f"[{self.name}] HTTP {response.status_code}: {response.text}"
            )
        return response
