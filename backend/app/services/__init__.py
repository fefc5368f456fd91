"""Business services."""

from app.services.signal_bot import BotState, BotStatus, SignalBot

__all__ = [
    "BotState",
    "BotStatus",
    "SignalBot",
]
