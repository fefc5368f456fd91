"""Candle (OHLCV) data models."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence

from pydantic import BaseModel, ConfigDict


class Candle(BaseModel):
    """OHLCV candle for one time bucket.

    Timestamps are Unix epoch milliseconds (bucket open time).
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal

    @property
    def open_time(self) -> datetime:
        """Bucket open time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)

    @property
    def is_bullish(self) -> bool:
        """Check if this is a bullish (green) candle."""
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        """Check if this is a bearish (red) candle."""
        return self.close < self.open


def closing_prices(candles: Sequence[Candle]) -> list[Decimal]:
    """Get list of close prices, oldest first."""
    return [c.close for c in candles]
