"""In-memory signal history and running counters."""

import logging

from core.models import Signal, SignalStats

logger = logging.getLogger(__name__)


class SignalLedger:
    """Ordered, append-only record of accepted signals.

    History is kept in insertion order and never evicted, so memory grows
    with the number of signals over the life of the process.
    """

    def __init__(self):
        self._signals: list[Signal] = []
        self.stats = SignalStats()

    def record(self, signal: Signal) -> None:
        """Append an accepted signal and update the counters."""
        self._signals.append(signal)
        self.stats.record(signal.direction)
        logger.debug(
            f"Ledger: {len(self._signals)} signals "
            f"(buy={self.stats.buy_signals}, sell={self.stats.sell_signals})"
        )

    def history(self) -> list[Signal]:
        """Full history, oldest first."""
        return list(self._signals)

    def recent(self, limit: int = 10) -> list[Signal]:
        """Most recent signals, newest first."""
        if limit <= 0:
            return []
        return self._signals[-limit:][::-1]

    @property
    def last(self) -> Signal | None:
        return self._signals[-1] if self._signals else None

    def __len__(self) -> int:
        return len(self._signals)
