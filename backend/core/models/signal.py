"""Signal and statistics data models."""

import hashlib
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Direction(str, Enum):
    """Signal direction."""

    BUY = "BUY"
    SELL = "SELL"


def _generate_signal_id(symbol: str, timeframe: str, timestamp: int, direction: str) -> str:
    """Generate deterministic signal ID based on signal attributes."""
    key = f"{symbol}:{timeframe}:{timestamp}:{direction}"
    return hashlib.sha256(key.encode()).hexdigest()[:32]


class Signal(BaseModel):
    """Accepted crossover signal with its exit levels."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    timeframe: str
    direction: Direction
    entry_price: Decimal
    stop_loss: Decimal
    take_profit: Decimal
    fast_ma: Decimal
    slow_ma: Decimal
    timestamp: int  # Unix epoch milliseconds

    @computed_field
    @property
    def id(self) -> str:
        return _generate_signal_id(
            self.symbol, self.timeframe, self.timestamp, self.direction.value
        )

    @property
    def signal_time(self) -> datetime:
        """Signal time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)


class SignalStats(BaseModel):
    """Running signal counters.

    Counters only ever grow; total_signals == buy_signals + sell_signals.
    """

    total_signals: int = 0
    buy_signals: int = 0
    sell_signals: int = 0
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def record(self, direction: Direction) -> None:
        """Count an accepted signal."""
        self.total_signals += 1
        if direction == Direction.BUY:
            self.buy_signals += 1
        else:
            self.sell_signals += 1

    @property
    def uptime_seconds(self) -> float:
        return (datetime.now(timezone.utc) - self.started_at).total_seconds()
