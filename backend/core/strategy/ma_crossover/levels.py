"""Stop-loss / take-profit level calculation."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from core.models import Direction

# Levels are stored with 6 fractional digits
LEVEL_QUANTUM = Decimal("0.000001")


@dataclass(frozen=True, slots=True)
class TradeLevels:
    """Exit levels for an entry."""

    stop_loss: Decimal
    take_profit: Decimal


def calculate_levels(
    entry_price: Decimal,
    direction: Direction,
    stop_loss_percent: Decimal,
    risk_reward_ratio: Decimal,
) -> TradeLevels:
    """
    Derive stop-loss and take-profit from an entry price.

    SL distance = entry * stop_loss_percent / 100
    TP distance = SL distance * risk_reward_ratio

    Both levels are rounded half-up to 6 decimal places. A very large
    stop_loss_percent can yield a negative BUY stop-loss; that is not
    guarded.
    """
    stop_distance = entry_price * stop_loss_percent / Decimal(100)
    profit_distance = stop_distance * risk_reward_ratio

    if direction == Direction.BUY:
        stop_loss = entry_price - stop_distance
        take_profit = entry_price + profit_distance
    else:
        stop_loss = entry_price + stop_distance
        take_profit = entry_price - profit_distance

    return TradeLevels(
        stop_loss=stop_loss.quantize(LEVEL_QUANTUM, rounding=ROUND_HALF_UP),
        take_profit=take_profit.quantize(LEVEL_QUANTUM, rounding=ROUND_HALF_UP),
    )
