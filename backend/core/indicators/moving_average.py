"""Simple moving average calculations (NumPy)."""

from decimal import Decimal
from typing import Sequence

import numpy as np


def sma(values: Sequence[Decimal], period: int) -> Decimal | None:
    """
    Calculate the Simple Moving Average of the most recent values.

    Args:
        values: Sequence of price values, oldest first
        period: SMA period (>= 1)

    Returns:
        Mean of the last `period` values, or None if there are fewer
        than `period` values
    """
    if period < 1:
        raise ValueError(f"SMA period must be >= 1, got {period}")
    if len(values) < period:
        return None

    window = np.array([float(v) for v in values[-period:]], dtype=np.float64)
    return Decimal(str(float(np.mean(window))))


def sma_pair(values: Sequence[Decimal], period: int) -> tuple[Decimal | None, Decimal | None]:
    """
    Calculate the SMA for the current and the previous evaluation.

    The previous value is the SMA of the series with its last element
    dropped.

    Returns:
        (current, previous); either may be None on short history
    """
    return sma(values, period), sma(values[:-1], period)
