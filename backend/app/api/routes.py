"""REST API routes."""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from app.services.signal_bot import BotState, SignalBot
from core.errors import (
    AnalysisInProgressError,
    ConnectivityError,
    LifecycleError,
    ProviderError,
)
from core.models import Signal

logger = logging.getLogger(__name__)

router = APIRouter()


# Response models
class SignalResponse(BaseModel):
    """Signal response model."""

    id: str
    symbol: str
    timeframe: str
    direction: str
    entry_price: float
    stop_loss: float
    take_profit: float
    fast_ma: float
    slow_ma: float
    timestamp: int
    signal_time: datetime

    @classmethod
    def from_signal(cls, s: Signal) -> "SignalResponse":
        return cls(
            id=s.id,
            symbol=s.symbol,
            timeframe=s.timeframe,
            direction=s.direction.value,
            entry_price=float(s.entry_price),
            stop_loss=float(s.stop_loss),
            take_profit=float(s.take_profit),
            fast_ma=float(s.fast_ma),
            slow_ma=float(s.slow_ma),
            timestamp=s.timestamp,
            signal_time=s.signal_time,
        )


class StatsResponse(BaseModel):
    """Signal counters."""

    total_signals: int
    buy_signals: int
    sell_signals: int
    started_at: datetime
    uptime_seconds: float


class ConfigResponse(BaseModel):
    """Strategy configuration."""

    symbol: str
    timeframe: str
    fast_period: int
    slow_period: int
    risk_reward_ratio: float
    stop_loss_percent: float
    poll_interval_ms: int


class StatusResponse(BaseModel):
    """Bot status response."""

    state: BotState
    is_active: bool
    config: ConfigResponse
    stats: StatsResponse
    last_fast_ma: Optional[float] = None
    last_slow_ma: Optional[float] = None
    last_price: Optional[float] = None
    last_signal: Optional[SignalResponse] = None
    cycle_running: bool


class ActionResponse(BaseModel):
    """Result of a control command."""

    success: bool
    message: str


class AnalyzeResponse(ActionResponse):
    """Result of a manual analysis."""

    signal: Optional[SignalResponse] = None


class ConfigUpdate(BaseModel):
    """Partial config update (unvalidated against the exchange)."""

    symbol: Optional[str] = None
    timeframe: Optional[str] = None


class PriceResponse(BaseModel):
    """Last price response."""

    symbol: str
    price: float


def _opt_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def get_bot(request: Request) -> SignalBot:
    """Dependency returning the application's bot."""
    bot = getattr(request.app.state, "bot", None)
    if bot is None:
        raise HTTPException(status_code=503, detail="Bot not initialized")
    return bot


def _config_response(bot: SignalBot) -> ConfigResponse:
    config = bot.config
    return ConfigResponse(
        symbol=config.symbol,
        timeframe=config.timeframe,
        fast_period=config.fast_period,
        slow_period=config.slow_period,
        risk_reward_ratio=float(config.risk_reward_ratio),
        stop_loss_percent=float(config.stop_loss_percent),
        poll_interval_ms=config.poll_interval_ms,
    )


@router.get("/status", response_model=StatusResponse)
async def get_status(bot: SignalBot = Depends(get_bot)):
    """Get bot status."""
    status = bot.get_status()
    return StatusResponse(
        state=status.state,
        is_active=status.is_active,
        config=_config_response(bot),
        stats=StatsResponse(
            total_signals=status.stats.total_signals,
            buy_signals=status.stats.buy_signals,
            sell_signals=status.stats.sell_signals,
            started_at=status.stats.started_at,
            uptime_seconds=status.stats.uptime_seconds,
        ),
        last_fast_ma=_opt_float(status.last_fast_ma),
        last_slow_ma=_opt_float(status.last_slow_ma),
        last_price=_opt_float(status.last_price),
        last_signal=(
            SignalResponse.from_signal(status.last_signal)
            if status.last_signal
            else None
        ),
        cycle_running=status.cycle_running,
    )


@router.get("/signals", response_model=list[SignalResponse])
async def get_signals(
    limit: Optional[int] = Query(None, ge=1, description="Maximum signals to return"),
    newest_first: bool = Query(False, description="Reverse chronological order"),
    bot: SignalBot = Depends(get_bot),
):
    """Get accepted signals."""
    signals = bot.get_signals(limit=limit, newest_first=newest_first)
    return [SignalResponse.from_signal(s) for s in signals]


@router.post("/start", response_model=ActionResponse)
async def start_bot(bot: SignalBot = Depends(get_bot)):
    """Start monitoring the market."""
    try:
        await bot.start()
    except LifecycleError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ConnectivityError as e:
        logger.error(f"Error starting bot: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    return ActionResponse(success=True, message="Bot started successfully")


@router.post("/stop", response_model=ActionResponse)
async def stop_bot(bot: SignalBot = Depends(get_bot)):
    """Stop monitoring the market."""
    try:
        await bot.stop()
    except LifecycleError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return ActionResponse(success=True, message="Bot stopped successfully")


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_now(bot: SignalBot = Depends(get_bot)):
    """Run one analysis cycle immediately."""
    try:
        signal = await bot.trigger_analysis_now()
    except AnalysisInProgressError as e:
        return AnalyzeResponse(success=False, message=str(e))
    return AnalyzeResponse(
        success=True,
        message="Market analysis completed",
        signal=SignalResponse.from_signal(signal) if signal else None,
    )


@router.put("/config", response_model=ConfigResponse)
async def update_config(update: ConfigUpdate, bot: SignalBot = Depends(get_bot)):
    """Update the monitored symbol and/or timeframe."""
    bot.update_config(symbol=update.symbol, timeframe=update.timeframe)
    return _config_response(bot)


@router.get("/price/{symbol:path}", response_model=PriceResponse)
async def get_price(symbol: str, bot: SignalBot = Depends(get_bot)):
    """Get the last traded price for a symbol."""
    try:
        price = await bot.get_price(symbol)
    except ProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return PriceResponse(symbol=symbol, price=float(price))
