"""Moving-average crossover detection.

- BUY: fast MA moves from at-or-below the slow MA to strictly above it
- SELL: fast MA moves from at-or-above the slow MA to strictly below it

A tie on the previous evaluation is compatible with a cross starting
now; a tie on the current evaluation is never a signal.

This module is pure business logic with no I/O dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from core.indicators import sma_pair
from core.models import Direction


@dataclass(frozen=True, slots=True)
class MovingAverages:
    """Fast/slow MA values for the current and the previous evaluation."""

    fast_current: Decimal | None
    slow_current: Decimal | None
    fast_previous: Decimal | None
    slow_previous: Decimal | None

    @classmethod
    def from_closes(
        cls, closes: Sequence[Decimal], fast_period: int, slow_period: int
    ) -> MovingAverages:
        fast_current, fast_previous = sma_pair(closes, fast_period)
        slow_current, slow_previous = sma_pair(closes, slow_period)
        return cls(
            fast_current=fast_current,
            slow_current=slow_current,
            fast_previous=fast_previous,
            slow_previous=slow_previous,
        )

    @property
    def is_complete(self) -> bool:
        """True when all four values are defined."""
        return None not in (
            self.fast_current,
            self.slow_current,
            self.fast_previous,
            self.slow_previous,
        )

    def crossover(self) -> Direction | None:
        if not self.is_complete:
            return None
        return detect_crossover(
            self.fast_previous,
            self.slow_previous,
            self.fast_current,
            self.slow_current,
        )


def detect_crossover(
    fast_prev: Decimal | None,
    slow_prev: Decimal | None,
    fast_cur: Decimal | None,
    slow_cur: Decimal | None,
) -> Direction | None:
    """Classify the move between two evaluations.

    Args:
        fast_prev: Fast MA on the previous evaluation
        slow_prev: Slow MA on the previous evaluation
        fast_cur: Fast MA on the current evaluation
        slow_cur: Slow MA on the current evaluation

    Returns:
        Direction.BUY, Direction.SELL, or None when no cross happened
        (including when any value is undefined)
    """
    if fast_prev is None or slow_prev is None or fast_cur is None or slow_cur is None:
        return None

    # Bullish crossover: fast was at or below slow, now strictly above
    if fast_prev <= slow_prev and fast_cur > slow_cur:
        return Direction.BUY

    # Bearish crossover: fast was at or above slow, now strictly below
    if fast_prev >= slow_prev and fast_cur < slow_cur:
        return Direction.SELL

    return None
