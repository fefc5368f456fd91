"""Application configuration."""

from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models import StrategyConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Market
    trading_pair: str = "BTC/USDT"
    timeframe: str = "5m"

    # Strategy Parameters
    fast_period: int = 25
    slow_period: int = 99
    risk_reward_ratio: float = 2.0
    stop_loss_percent: float = 1.0
    poll_interval_ms: int = 60_000
    candle_margin: int = 10  # extra candles fetched beyond slow_period

    # Binance API (USD-M futures public endpoints)
    binance_base_url: str = "https://fapi.binance.com"
    http_timeout: float = 10.0

    # Notifications: "auto", "telegram", "discord" or "log"
    notifier: str = "auto"
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    discord_webhook_url: str = ""
    discord_username: str = ""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False

    def strategy_config(self) -> StrategyConfig:
        """Build the strategy configuration from these settings."""
        return StrategyConfig(
            symbol=self.trading_pair,
            timeframe=self.timeframe,
            fast_period=self.fast_period,
            slow_period=self.slow_period,
            risk_reward_ratio=Decimal(str(self.risk_reward_ratio)),
            stop_loss_percent=Decimal(str(self.stop_loss_percent)),
            poll_interval_ms=self.poll_interval_ms,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
