"""Market data and sentiment clients."""

from app.clients.errors import UpstreamUnavailableError
from app.clients.binance_rest import BinanceRestClient, RateLimiter, format_symbol
from app.clients.fear_greed import FearGreedClient

__all__ = [
    "UpstreamUnavailableError",
    "BinanceRestClient",
    "RateLimiter",
    "format_symbol",
    "FearGreedClient",
]
