"""Collaborator protocols consumed by the signal pipeline.

This module provides:
- MarketDataProvider: source of candles and last-traded prices
- Notifier: delivery of formatted signals to a chat platform
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence, runtime_checkable

from core.models import Candle, Signal, StrategyConfig


@runtime_checkable
class MarketDataProvider(Protocol):
    """Market data source.

    Implementations raise core.errors.ProviderError on failure and own
    their own timeout policy.
    """

    async def ping(self) -> None:
        """Check reachability; raise ConnectivityError if unreachable."""
        ...

    async def fetch_recent_candles(
        self, symbol: str, timeframe: str, count: int
    ) -> Sequence[Candle]:
        """Fetch up to `count` most recent candles, oldest first."""
        ...

    async def fetch_last_price(self, symbol: str) -> Decimal:
        """Fetch the last traded price."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """Signal delivery backend.

    Implementations raise core.errors.DeliveryError on failure.
    """

    async def deliver(self, signal: Signal, config: StrategyConfig) -> None:
        """Deliver a formatted signal alert."""
        ...

    async def send_text(self, text: str) -> None:
        """Deliver a plain status message."""
        ...
