"""Exchange clients."""

from app.clients.binance_rest import BinanceRestClient, to_exchange_symbol

__all__ = [
    "BinanceRestClient",
    "to_exchange_symbol",
]
