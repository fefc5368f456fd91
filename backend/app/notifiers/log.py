"""Notifier that only writes alerts to the application log."""

import logging

from app.notifiers.base import format_signal_message
from core.models import Signal, StrategyConfig

logger = logging.getLogger(__name__)


class LogNotifier:
    """Fallback notifier used when no chat backend is configured."""

    name = "log"

    async def send_text(self, text: str) -> None:
        logger.info(f"[notify] {text}")

    async def deliver(self, signal: Signal, config: StrategyConfig) -> None:
        logger.info(f"[notify]\n{format_signal_message(signal, config)}")

    async def close(self) -> None:
        return None
