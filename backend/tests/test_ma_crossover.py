"""Tests for the MA crossover pipeline stages."""

import pytest
from decimal import Decimal

from core.models import Direction, Signal
from core.strategy import (
    SIGNAL_COOLDOWN_MS,
    MovingAverages,
    SignalLedger,
    calculate_levels,
    detect_crossover,
    is_in_cooldown,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _d(value) -> Decimal:
    return Decimal(str(value))


def _make_signal(direction: Direction, timestamp: int) -> Signal:
    return Signal(
        symbol="BTC/USDT",
        timeframe="5m",
        direction=direction,
        entry_price=Decimal("100"),
        stop_loss=Decimal("99"),
        take_profit=Decimal("102"),
        fast_ma=Decimal("1"),
        slow_ma=Decimal("1"),
        timestamp=timestamp,
    )


# ---------------------------------------------------------------------------
# Crossover detector
# ---------------------------------------------------------------------------

class TestDetectCrossover:
    """Test crossover classification."""

    def test_bullish_crossover(self):
        assert detect_crossover(_d(1), _d(2), _d(3), _d(2)) == Direction.BUY

    def test_bearish_crossover(self):
        assert detect_crossover(_d(2), _d(1), _d(1), _d(2)) == Direction.SELL

    def test_no_crossover_when_staying_above(self):
        assert detect_crossover(_d(3), _d(2), _d(3), _d(2)) is None

    def test_no_crossover_when_staying_below(self):
        assert detect_crossover(_d(1), _d(2), _d(1), _d(3)) is None

    def test_previous_tie_allows_bullish_cross(self):
        assert detect_crossover(_d(2), _d(2), _d(3), _d(2)) == Direction.BUY

    def test_previous_tie_allows_bearish_cross(self):
        assert detect_crossover(_d(2), _d(2), _d(1), _d(2)) == Direction.SELL

    def test_current_tie_is_never_a_signal(self):
        assert detect_crossover(_d(1), _d(2), _d(2), _d(2)) is None
        assert detect_crossover(_d(3), _d(2), _d(2), _d(2)) is None
        assert detect_crossover(_d(2), _d(2), _d(2), _d(2)) is None

    @pytest.mark.parametrize("missing", range(4))
    def test_undefined_value_gives_no_signal(self, missing):
        values = [_d(1), _d(2), _d(3), _d(2)]
        values[missing] = None
        assert detect_crossover(*values) is None


class TestMovingAverages:
    """Test the MA snapshot built from closes."""

    def test_from_closes_bullish(self):
        closes = [_d(v) for v in (10, 10, 10, 10, 10, 20)]
        mas = MovingAverages.from_closes(closes, fast_period=2, slow_period=4)

        assert mas.fast_current == Decimal("15")
        assert mas.slow_current == Decimal("12.5")
        assert mas.fast_previous == Decimal("10")
        assert mas.slow_previous == Decimal("10")
        assert mas.is_complete
        assert mas.crossover() == Direction.BUY

    def test_incomplete_when_previous_slow_missing(self):
        closes = [_d(v) for v in (10, 10, 10, 20)]
        mas = MovingAverages.from_closes(closes, fast_period=2, slow_period=4)

        assert mas.slow_current is not None
        assert mas.slow_previous is None
        assert not mas.is_complete
        assert mas.crossover() is None


# ---------------------------------------------------------------------------
# Level calculator
# ---------------------------------------------------------------------------

class TestCalculateLevels:
    """Test stop-loss / take-profit derivation."""

    def test_buy_levels(self):
        levels = calculate_levels(Decimal("100"), Direction.BUY, Decimal("1"), Decimal("2"))
        assert levels.stop_loss == Decimal("99.000000")
        assert levels.take_profit == Decimal("102.000000")

    def test_sell_levels(self):
        levels = calculate_levels(Decimal("100"), Direction.SELL, Decimal("1"), Decimal("2"))
        assert levels.stop_loss == Decimal("101.000000")
        assert levels.take_profit == Decimal("98.000000")

    def test_levels_have_six_decimals(self):
        levels = calculate_levels(
            Decimal("0.12345678"), Direction.BUY, Decimal("1.5"), Decimal("2")
        )
        assert levels.stop_loss.as_tuple().exponent == -6
        assert levels.take_profit.as_tuple().exponent == -6
        # 0.12345678 - 0.0018518517 = 0.1216049283
        assert levels.stop_loss == Decimal("0.121605")
        # 0.12345678 + 0.0037037034 = 0.1271604834
        assert levels.take_profit == Decimal("0.127160")

    def test_rounds_half_up(self):
        # distance = 0.0000005 -> stop 0.9999995 -> 1.000000
        levels = calculate_levels(
            Decimal("1"), Direction.BUY, Decimal("0.00005"), Decimal("1")
        )
        assert levels.stop_loss == Decimal("1.000000")

    def test_extreme_stop_can_go_negative(self):
        levels = calculate_levels(Decimal("100"), Direction.BUY, Decimal("150"), Decimal("1"))
        assert levels.stop_loss == Decimal("-50.000000")


# ---------------------------------------------------------------------------
# Cooldown guard
# ---------------------------------------------------------------------------

class TestCooldown:
    """Test duplicate-signal suppression."""

    def test_window_constant(self):
        assert SIGNAL_COOLDOWN_MS == 300_000

    def test_no_previous_signal(self):
        assert not is_in_cooldown(None, Direction.BUY, 0)

    def test_same_direction_inside_window_suppressed(self):
        last = _make_signal(Direction.BUY, 0)
        assert is_in_cooldown(last, Direction.BUY, 299_999)

    def test_same_direction_at_window_accepted(self):
        last = _make_signal(Direction.BUY, 0)
        assert not is_in_cooldown(last, Direction.BUY, 300_000)

    def test_opposite_direction_never_suppressed(self):
        last = _make_signal(Direction.BUY, 0)
        assert not is_in_cooldown(last, Direction.SELL, 1)


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------

class TestSignalLedger:
    """Test signal history and counters."""

    def test_empty(self):
        ledger = SignalLedger()
        assert len(ledger) == 0
        assert ledger.history() == []
        assert ledger.recent() == []
        assert ledger.last is None

    def test_record_preserves_order(self):
        ledger = SignalLedger()
        signals = [_make_signal(Direction.BUY, t) for t in (1, 2, 3)]
        for s in signals:
            ledger.record(s)

        assert ledger.history() == signals
        assert ledger.last == signals[-1]

    def test_recent_is_newest_first(self):
        ledger = SignalLedger()
        signals = [_make_signal(Direction.BUY, t) for t in range(15)]
        for s in signals:
            ledger.record(s)

        recent = ledger.recent(10)
        assert len(recent) == 10
        assert [s.timestamp for s in recent] == list(range(14, 4, -1))
        assert ledger.recent(0) == []

    def test_history_is_a_copy(self):
        ledger = SignalLedger()
        ledger.record(_make_signal(Direction.BUY, 1))
        ledger.history().clear()
        assert len(ledger) == 1

    def test_stats_invariant(self):
        ledger = SignalLedger()
        directions = [Direction.BUY, Direction.SELL, Direction.SELL, Direction.BUY, Direction.BUY]
        previous_total = 0
        for i, direction in enumerate(directions):
            ledger.record(_make_signal(direction, i))
            stats = ledger.stats
            assert stats.total_signals == stats.buy_signals + stats.sell_signals
            assert stats.total_signals >= previous_total
            previous_total = stats.total_signals

        assert ledger.stats.buy_signals == 3
        assert ledger.stats.sell_signals == 2
