"""Signal bot lifecycle controller.

Owns the active/inactive state machine, the polling timer and all
mutable bot state (config, ledger, last signal, last MA snapshot). On
every tick it runs the pipeline:

    candles -> SMA (fast/slow, current/previous) -> crossover
    -> last price -> cooldown -> levels -> notifier -> ledger

At most one analysis cycle is in flight at a time. Ticks that find a
cycle still running are skipped.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel

from app.notifiers import STOP_MESSAGE, format_start_message
from core.errors import (
    AlreadyActiveError,
    AnalysisInProgressError,
    DeliveryError,
    InsufficientDataError,
    NotActiveError,
    ProviderError,
)
from core.models import Signal, SignalStats, StrategyConfig, closing_prices
from core.strategy import (
    MarketDataProvider,
    MovingAverages,
    Notifier,
    SignalLedger,
    calculate_levels,
    is_in_cooldown,
)

logger = logging.getLogger(__name__)

# Candles fetched beyond slow_period
DEFAULT_CANDLE_MARGIN = 10


def now_ms() -> int:
    return int(time.time() * 1000)


class BotState(str, Enum):
    """Lifecycle state."""

    INACTIVE = "inactive"
    ACTIVE = "active"


class BotStatus(BaseModel):
    """Snapshot returned by get_status()."""

    state: BotState
    is_active: bool
    config: StrategyConfig
    stats: SignalStats
    last_fast_ma: Decimal | None = None
    last_slow_ma: Decimal | None = None
    last_price: Decimal | None = None
    last_signal: Signal | None = None
    cycle_running: bool = False


class SignalBot:
    """Moving-average crossover signal bot.

    Args:
        config: Strategy parameters (owned and mutated only by this class)
        provider: Market data source
        notifier: Alert delivery backend
        clock: Returns current time in epoch milliseconds
        candle_margin: Extra candles fetched beyond slow_period
    """

    def __init__(
        self,
        config: StrategyConfig,
        provider: MarketDataProvider,
        notifier: Notifier,
        clock: Callable[[], int] = now_ms,
        candle_margin: int = DEFAULT_CANDLE_MARGIN,
    ):
        self.config = config
        self._provider = provider
        self._notifier = notifier
        self._clock = clock
        self.candle_margin = candle_margin

        self.state = BotState.INACTIVE
        self.ledger = SignalLedger()
        self._last_signal: Signal | None = None

        self.last_fast_ma: Decimal | None = None
        self.last_slow_ma: Decimal | None = None
        self.last_price: Decimal | None = None

        # Incremented on every start/stop; a cycle whose session has
        # ended discards its result.
        self._session = 0
        self._starting = False
        self._timer_task: asyncio.Task | None = None
        self._cycle_task: asyncio.Task | None = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.state is BotState.ACTIVE

    @property
    def cycle_running(self) -> bool:
        return self._cycle_task is not None and not self._cycle_task.done()

    @property
    def stats(self) -> SignalStats:
        return self.ledger.stats

    @property
    def last_signal(self) -> Signal | None:
        return self._last_signal

    def get_status(self) -> BotStatus:
        return BotStatus(
            state=self.state,
            is_active=self.is_active,
            config=self.config,
            stats=self.stats.model_copy(),
            last_fast_ma=self.last_fast_ma,
            last_slow_ma=self.last_slow_ma,
            last_price=self.last_price,
            last_signal=self._last_signal,
            cycle_running=self.cycle_running,
        )

    def get_signals(self, limit: int | None = None, newest_first: bool = False) -> list[Signal]:
        """Return accepted signals, oldest first unless newest_first is set."""
        if newest_first:
            return self.ledger.recent(limit if limit is not None else len(self.ledger))
        history = self.ledger.history()
        if limit is not None:
            history = history[-limit:] if limit > 0 else []
        return history

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def update_config(self, symbol: str | None = None, timeframe: str | None = None) -> StrategyConfig:
        """Change the monitored symbol and/or timeframe.

        Values are not checked against the exchange; an unsupported
        symbol or timeframe shows up as a ProviderError on the next cycle.
        """
        changes = {}
        if symbol:
            changes["symbol"] = symbol
        if timeframe:
            changes["timeframe"] = timeframe
        if changes:
            self.config = self.config.model_copy(update=changes)
            logger.info(f"Config updated: {changes}")
        return self.config

    async def start(self) -> None:
        """Verify connectivity, go ACTIVE, analyze once and arm the timer.

        Raises:
            AlreadyActiveError: If the bot is already active
            ConnectivityError: If the market data provider is unreachable
        """
        if self.is_active or self._starting:
            raise AlreadyActiveError()

        self._starting = True
        try:
            await self._provider.ping()
        finally:
            self._starting = False
        logger.info("Exchange connection established")

        self.state = BotState.ACTIVE
        self._session += 1
        session = self._session
        logger.info(
            f"Bot started: {self.config.symbol} {self.config.timeframe} "
            f"MA({self.config.fast_period})/MA({self.config.slow_period}), "
            f"every {self.config.poll_interval:g}s"
        )
        await self._announce(format_start_message(self.config))
        if self._session_ended(session, True):
            logger.info("Bot stopped during start, skipping initial analysis")
            return

        await self._run_cycle_in_slot(session)

        # A stop() during the first cycle must not leave a timer behind
        if self.is_active and self._session == session:
            self._timer_task = asyncio.create_task(self._poll_loop(session))

    async def stop(self) -> None:
        """Go INACTIVE and disarm the timer.

        An in-flight cycle is not cancelled; it discards its result when
        its network call returns.

        Raises:
            NotActiveError: If the bot is not active
        """
        if not self.is_active:
            raise NotActiveError()

        self.state = BotState.INACTIVE
        self._session += 1

        if self._timer_task:
            self._timer_task.cancel()
            try:
                await self._timer_task
            except asyncio.CancelledError:
                pass
            self._timer_task = None

        logger.info("Bot stopped")
        await self._announce(STOP_MESSAGE)

    async def trigger_analysis_now(self) -> Signal | None:
        """Run one analysis cycle immediately.

        Returns:
            The accepted signal, if any

        Raises:
            AnalysisInProgressError: If a cycle is already in flight
        """
        if self.cycle_running:
            raise AnalysisInProgressError()
        return await self._run_cycle_in_slot()

    async def get_price(self, symbol: str | None = None) -> Decimal:
        """Fetch the last price for a symbol (defaults to the configured one)."""
        target = symbol or self.config.symbol
        price = await self._provider.fetch_last_price(target)
        if target == self.config.symbol:
            self.last_price = price
        return price

    async def close(self) -> None:
        """Stop if active and wait for an in-flight cycle to finish."""
        if self.is_active:
            await self.stop()
        if self._cycle_task and not self._cycle_task.done():
            await asyncio.gather(self._cycle_task, return_exceptions=True)

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    async def _poll_loop(self, session: int) -> None:
        """Fixed-rate timer: fire a tick every poll interval while active."""
        while True:
            await asyncio.sleep(self.config.poll_interval)
            if not self.is_active or self._session != session:
                break
            if self.cycle_running:
                logger.warning("Previous analysis still running, skipping tick")
                continue
            self._cycle_task = asyncio.create_task(self._safe_cycle(session))

    async def _safe_cycle(self, session: int | None = None) -> Signal | None:
        try:
            return await self.analysis_cycle(session)
        except Exception:
            logger.exception("Error in market analysis")
            return None

    async def _run_cycle_in_slot(self, session: int | None = None) -> Signal | None:
        """Run a cycle in the single in-flight slot and wait for it."""
        if self.cycle_running:
            await asyncio.gather(self._cycle_task, return_exceptions=True)
        self._cycle_task = asyncio.create_task(self._safe_cycle(session))
        return await self._cycle_task

    async def _announce(self, text: str) -> None:
        try:
            await self._notifier.send_text(text)
        except DeliveryError as e:
            logger.error(f"Failed to send status message: {e}")

    # ------------------------------------------------------------------
    # Core logic
    # ------------------------------------------------------------------

    async def _load_moving_averages(self, config: StrategyConfig) -> MovingAverages:
        """Fetch candles and compute the MA snapshot.

        Raises:
            ProviderError: If the candle fetch fails
            InsufficientDataError: If history is too short for the slow MA
        """
        candles = await self._provider.fetch_recent_candles(
            config.symbol, config.timeframe, config.slow_period + self.candle_margin
        )
        if len(candles) < config.slow_period:
            raise InsufficientDataError(
                f"got {len(candles)} candles, need {config.slow_period}"
            )

        mas = MovingAverages.from_closes(
            closing_prices(candles), config.fast_period, config.slow_period
        )
        self.last_fast_ma = mas.fast_current
        self.last_slow_ma = mas.slow_current

        if not mas.is_complete:
            raise InsufficientDataError("unable to calculate moving averages")
        return mas

    def _session_ended(self, session: int, started_active: bool) -> bool:
        return started_active and (not self.is_active or self._session != session)

    async def analysis_cycle(self, session: int | None = None) -> Signal | None:
        """Run the signal pipeline once.

        Args:
            session: Session the cycle belongs to. When given, the result
                is discarded once that session has ended, even if it
                ended before the cycle began.

        Returns:
            The accepted signal, or None if the cycle produced nothing
        """
        config = self.config
        if session is None:
            session = self._session
            started_active = self.is_active
        else:
            started_active = True
        if self._session_ended(session, started_active):
            logger.info("Bot stopped before analysis, skipping cycle")
            return None
        logger.info(f"Analyzing {config.symbol} {config.timeframe}")

        try:
            mas = await self._load_moving_averages(config)
        except ProviderError as e:
            logger.error(f"Error fetching candles for {config.symbol}: {e}")
            return None
        except InsufficientDataError as e:
            logger.warning(f"Insufficient data for analysis: {e}")
            return None

        direction = mas.crossover()
        if direction is None:
            logger.debug(
                f"No signal - MA({config.fast_period}): {mas.fast_current:.6f}, "
                f"MA({config.slow_period}): {mas.slow_current:.6f}"
            )
            return None

        try:
            price = await self._provider.fetch_last_price(config.symbol)
        except ProviderError as e:
            logger.warning(f"Unable to get current price: {e}")
            return None
        self.last_price = price

        if price <= 0:
            logger.warning(f"Unable to get current price: got {price}")
            return None

        if self._session_ended(session, started_active):
            logger.info(f"Bot stopped during analysis, discarding {direction.value} signal")
            return None

        timestamp = self._clock()
        if is_in_cooldown(self._last_signal, direction, timestamp):
            logger.warning("Signal cooldown active, skipping duplicate signal")
            return None

        levels = calculate_levels(
            price, direction, config.stop_loss_percent, config.risk_reward_ratio
        )
        signal = Signal(
            symbol=config.symbol,
            timeframe=config.timeframe,
            direction=direction,
            entry_price=price,
            stop_loss=levels.stop_loss,
            take_profit=levels.take_profit,
            fast_ma=mas.fast_current,
            slow_ma=mas.slow_current,
            timestamp=timestamp,
        )

        try:
            await self._notifier.deliver(signal, config)
        except DeliveryError as e:
            logger.error(f"Failed to deliver {signal.direction.value} signal: {e}")
        except Exception:
            logger.exception(f"Unexpected error delivering {signal.direction.value} signal")

        if self._session_ended(session, started_active):
            logger.info(f"Bot stopped during delivery, not recording signal {signal.id}")
            return None

        self._last_signal = signal
        self.ledger.record(signal)
        logger.info(
            f"{signal.direction.value} signal generated: {signal.symbol} @ {price:.6f} "
            f"SL={signal.stop_loss} TP={signal.take_profit}"
        )
        return signal
