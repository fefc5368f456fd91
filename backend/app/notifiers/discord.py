"""Discord webhook notifier."""

import logging
from typing import Any

import httpx

from app.notifiers.base import HttpNotifier
from core.models import Direction, Signal, StrategyConfig

logger = logging.getLogger(__name__)

# Embed colors (decimal RGB)
COLOR_BUY = 0x2ECC71
COLOR_SELL = 0xE74C3C


class DiscordNotifier(HttpNotifier):
    """Send alerts to a Discord channel through a webhook."""

    name = "discord"

    def __init__(
        self,
        webhook_url: str,
        username: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.webhook_url = webhook_url
        self.username = username

    def _payload(self, **fields: Any) -> dict[str, Any]:
        payload = dict(fields)
        if self.username:
            payload["username"] = self.username
        return payload

    async def send_text(self, text: str) -> None:
        await self._post_json(self.webhook_url, self._payload(content=text))

    async def deliver(self, signal: Signal, config: StrategyConfig) -> None:
        embed = {
            "title": f"{signal.direction.value} SIGNAL | {signal.symbol}",
            "description": "Trade at your own risk!",
            "timestamp": signal.signal_time.isoformat(),
            "color": COLOR_BUY if signal.direction == Direction.BUY else COLOR_SELL,
            "fields": [
                {"name": "Entry Price", "value": f"{signal.entry_price:.6f}", "inline": True},
                {"name": "Take Profit", "value": f"{signal.take_profit:.6f}", "inline": True},
                {"name": "Stop Loss", "value": f"{signal.stop_loss:.6f}", "inline": True},
                {"name": f"MA({config.fast_period})", "value": f"{signal.fast_ma:.6f}", "inline": True},
                {"name": f"MA({config.slow_period})", "value": f"{signal.slow_ma:.6f}", "inline": True},
                {"name": "Risk/Reward", "value": f"1:{config.risk_reward_ratio}", "inline": True},
                {"name": "Timeframe", "value": signal.timeframe, "inline": True},
            ],
        }
        await self._post_json(self.webhook_url, self._payload(embeds=[embed]))
        logger.info(
            f"Discord alert sent: {signal.direction.value} signal for {signal.symbol}"
        )
