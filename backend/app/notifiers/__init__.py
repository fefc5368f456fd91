"""Chat notifiers behind a single Notifier protocol."""

import logging

from app.config import Settings
from app.notifiers.base import (
    STOP_MESSAGE,
    HttpNotifier,
    format_signal_message,
    format_start_message,
)
from app.notifiers.discord import DiscordNotifier
from app.notifiers.log import LogNotifier
from app.notifiers.telegram import TelegramNotifier

logger = logging.getLogger(__name__)

NOTIFIER_CHOICES = ("auto", "telegram", "discord", "log")


def create_notifier(settings: Settings) -> TelegramNotifier | DiscordNotifier | LogNotifier:
    """Select the notifier backend from settings.

    An explicit ``notifier`` setting wins. ``auto`` prefers Telegram, then
    Discord, then falls back to logging only.
    """
    choice = settings.notifier.strip().lower()
    if choice not in NOTIFIER_CHOICES:
        raise ValueError(
            f"Unknown notifier '{settings.notifier}'. "
            f"Available: {', '.join(NOTIFIER_CHOICES)}"
        )

    telegram_ready = bool(settings.telegram_bot_token and settings.telegram_chat_id)
    discord_ready = bool(settings.discord_webhook_url)

    if choice == "telegram" or (choice == "auto" and telegram_ready):
        if not telegram_ready:
            raise ValueError("Telegram notifier needs TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID")
        return TelegramNotifier(
            bot_token=settings.telegram_bot_token,
            chat_id=settings.telegram_chat_id,
            timeout=settings.http_timeout,
        )

    if choice == "discord" or (choice == "auto" and discord_ready):
        if not discord_ready:
            raise ValueError("Discord notifier needs DISCORD_WEBHOOK_URL")
        return DiscordNotifier(
            webhook_url=settings.discord_webhook_url,
            username=settings.discord_username,
            timeout=settings.http_timeout,
        )

    if choice == "auto":
        logger.warning(
            "No chat notifier configured (TELEGRAM_BOT_TOKEN/TELEGRAM_CHAT_ID "
            "or DISCORD_WEBHOOK_URL); signals will only be logged"
        )
    return LogNotifier()


__all__ = [
    "STOP_MESSAGE",
    "HttpNotifier",
    "DiscordNotifier",
    "LogNotifier",
    "TelegramNotifier",
    "create_notifier",
    "format_signal_message",
    "format_start_message",
]
