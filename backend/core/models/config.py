"""Strategy configuration model."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


class StrategyConfig(BaseModel):
    """Moving-average crossover strategy parameters."""

    symbol: str = "BTC/USDT"
    timeframe: str = "5m"

    # Moving average periods (fast must be shorter than slow)
    fast_period: int = Field(default=25, ge=1)
    slow_period: int = Field(default=99, ge=1)

    # Exit levels
    risk_reward_ratio: Decimal = Field(default=Decimal("2"), gt=0)
    stop_loss_percent: Decimal = Field(default=Decimal("1"), gt=0)

    poll_interval_ms: int = Field(default=60_000, gt=0)

    @model_validator(mode="after")
    def _check_periods(self) -> StrategyConfig:
        if self.fast_period >= self.slow_period:
            raise ValueError(
                f"fast_period ({self.fast_period}) must be less than "
                f"slow_period ({self.slow_period})"
            )
        return self

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000
