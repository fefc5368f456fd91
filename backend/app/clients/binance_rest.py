"""Binance REST API client used as the market data provider."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from core.errors import ConnectivityError, ProviderError
from core.models import Candle

logger = logging.getLogger(__name__)

# Binance rejects kline requests above this limit
MAX_KLINE_LIMIT = 1500


def to_exchange_symbol(symbol: str) -> str:
    """Convert a unified symbol (``BTC/USDT`` or ``BTC/USDT:USDT``) to ``BTCUSDT``."""
    return symbol.split(":", 1)[0].replace("/", "").upper()


class BinanceRestClient:
    """Binance Futures public REST client.

    Implements the MarketDataProvider protocol. Every transport or
    payload failure surfaces as ProviderError; there are no retries.
    """

    BASE_URL = "https://fapi.binance.com"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self, method: str, endpoint: str, params: dict[str, Any] | None = None
    ) -> Any:
        """Make an API request."""
        client = await self._get_client()
        try:
            response = await client.request(method, endpoint, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"{endpoint} returned HTTP {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"{endpoint} request failed: {e!r}") from e
        except ValueError as e:
            raise ProviderError(f"{endpoint} returned invalid JSON") from e

    async def ping(self) -> None:
        """Check that the exchange answers; raise ConnectivityError if not."""
        try:
            await self._request("GET", "/fapi/v1/ping")
        except ProviderError as e:
            raise ConnectivityError(f"Exchange unreachable: {e}") from e

    async def fetch_recent_candles(
        self, symbol: str, timeframe: str, count: int
    ) -> list[Candle]:
        """
        Fetch the most recent candles.

        Args:
            symbol: Trading pair (e.g., "BTC/USDT" or "BTCUSDT")
            timeframe: Candle interval (e.g., "5m", "1h")
            count: Number of candles (max 1500)

        Returns:
            List of Candle objects, oldest first
        """
        params = {
            "symbol": to_exchange_symbol(symbol),
            "interval": timeframe,
            "limit": min(count, MAX_KLINE_LIMIT),
        }
        data = await self._request("GET", "/fapi/v1/klines", params)

        try:
            candles = [
                Candle(
                    timestamp=int(item[0]),
                    open=Decimal(str(item[1])),
                    high=Decimal(str(item[2])),
                    low=Decimal(str(item[3])),
                    close=Decimal(str(item[4])),
                    volume=Decimal(str(item[5])),
                )
                for item in data
            ]
        except (TypeError, IndexError, ValueError, InvalidOperation) as e:
            raise ProviderError(f"Malformed kline payload for {symbol}: {e}") from e

        return candles

    async def fetch_last_price(self, symbol: str) -> Decimal:
        """Fetch the last traded price for a symbol."""
        data = await self._request(
            "GET", "/fapi/v1/ticker/price", {"symbol": to_exchange_symbol(symbol)}
        )
        try:
            return Decimal(str(data["price"]))
        except (TypeError, KeyError, InvalidOperation) as e:
            raise ProviderError(f"Malformed ticker payload for {symbol}: {e}") from e
