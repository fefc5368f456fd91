"""Technical indicators (pure math, no I/O)."""

from core.indicators.moving_average import sma, sma_pair

__all__ = [
    "sma",
    "sma_pair",
]
