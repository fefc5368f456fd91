"""Signal strategy pieces and collaborator protocols.

Public API:
- MarketDataProvider / Notifier: protocols for the external collaborators
- detect_crossover, calculate_levels, is_in_cooldown: pipeline stages
- SignalLedger: accepted-signal history and counters
"""

from core.strategy.protocol import MarketDataProvider, Notifier
from core.strategy.ma_crossover import (
    SIGNAL_COOLDOWN_MS,
    MovingAverages,
    SignalLedger,
    TradeLevels,
    calculate_levels,
    detect_crossover,
    is_in_cooldown,
)

__all__ = [
    "MarketDataProvider",
    "Notifier",
    "SIGNAL_COOLDOWN_MS",
    "MovingAverages",
    "SignalLedger",
    "TradeLevels",
    "calculate_levels",
    "detect_crossover",
    "is_in_cooldown",
]
