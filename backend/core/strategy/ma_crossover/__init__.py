"""Moving-average crossover strategy package."""

from core.strategy.ma_crossover.cooldown import SIGNAL_COOLDOWN_MS, is_in_cooldown
from core.strategy.ma_crossover.detector import MovingAverages, detect_crossover
from core.strategy.ma_crossover.ledger import SignalLedger
from core.strategy.ma_crossover.levels import TradeLevels, calculate_levels

__all__ = [
    "SIGNAL_COOLDOWN_MS",
    "is_in_cooldown",
    "MovingAverages",
    "detect_crossover",
    "SignalLedger",
    "TradeLevels",
    "calculate_levels",
]
