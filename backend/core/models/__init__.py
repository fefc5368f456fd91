"""Data models."""

from core.models.candle import Candle, closing_prices
from core.models.config import StrategyConfig
from core.models.signal import Direction, Signal, SignalStats

__all__ = [
    "Candle",
    "closing_prices",
    "StrategyConfig",
    "Direction",
    "Signal",
    "SignalStats",
]
