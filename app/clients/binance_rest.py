"""Binance REST API client for quotes and historical klines."""

import asyncio
import logging
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx
from pydantic import ValidationError

from app.clients.errors import UpstreamUnavailableError
from core.models import Kline

logger = logging.getLogger(__name__)

MAX_KLINES_PER_REQUEST = 1000


def format_symbol(symbol: str, quote_asset: str) -> str:
    """'btc' -> 'BTCUSDC'; non-alphanumerics are dropped."""
    base = re.sub(r"[^A-Z0-9]", "", symbol.upper())
    return f"{base}{quote_asset.upper()}"


class RateLimiter:
    """Simple rate limiter for API calls."""

    def __init__(self, calls_per_minute: int = 1200):
        self.calls_per_minute = calls_per_minute
        self.interval = 60.0 / calls_per_minute
        self.last_call = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait if necessary to respect rate limit."""
        async with self._lock:
            loop = asyncio.get_running_loop()
            wait_time = self.last_call + self.interval - loop.time()
            if wait_time > 0:
                await asyncio.sleep(wait_time)
            self.last_call = loop.time()


class BinanceRestClient:
    """Binance spot REST API client."""

    BASE_URL = "https://api.binance.com"

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str = "",
        timeout: float = 30.0,
        calls_per_minute: int = 1200,
    ):
        self.base_url = base_url or self.BASE_URL
        self.api_key = api_key
        self.timeout = timeout
        self.rate_limiter = RateLimiter(calls_per_minute)
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {}
            if self.api_key:
                headers["X-MBX-APIKEY"] = self.api_key
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
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
        """Make an API request with rate limiting.

        Raises:
            UpstreamUnavailableError: On transport errors, non-2xx replies or
                non-JSON bodies.
        """
        await self.rate_limiter.acquire()
        client = await self._get_client()
        try:
            response = await client.request(method, endpoint, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailableError(
                f"Binance returned {e.response.status_code} for {endpoint}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(f"Binance request failed: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamUnavailableError(
                f"Binance returned a non-JSON body for {endpoint}"
            ) from e

    async def get_ticker_price(self, symbol: str) -> Decimal:
        """
        Fetch the latest traded price.

        Args:
            symbol: Exchange symbol (e.g., "BTCUSDT")

        Returns:
            Last price
        """
        data = await self._request("GET", "/api/v3/ticker/price", {"symbol": symbol})
        try:
            return Decimal(str(data["price"]))
        except (KeyError, TypeError, InvalidOperation) as e:
            raise UpstreamUnavailableError(f"Malformed ticker payload for {symbol}: {e}") from e

    async def get_klines(
        self,
        symbol: str,
        interval: str,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        limit: int = MAX_KLINES_PER_REQUEST,
    ) -> list[Kline]:
        """
        Fetch K-line data from Binance.

        Args:
            symbol: Trading pair (e.g., "BTCUSDC")
            interval: K-line interval (e.g., "1m", "1d")
            start_time: Start time (inclusive)
            end_time: End time (inclusive)
            limit: Maximum number of K-lines (max 1000)

        Returns:
            List of Kline objects, oldest first
        """
        params: dict[str, Any] = {
            "symbol": symbol,
            "interval": interval,
            "limit": min(limit, MAX_KLINES_PER_REQUEST),
        }

        if start_time:
            params["startTime"] = int(start_time.timestamp() * 1000)
        if end_time:
            params["endTime"] = int(end_time.timestamp() * 1000)

        data = await self._request("GET", "/api/v3/klines", params)

        if not isinstance(data, list):
            raise UpstreamUnavailableError(f"Malformed klines payload for {symbol}")

        klines = []
        try:
            for item in data:
                klines.append(
                    Kline(
                        symbol=symbol,
                        timeframe=interval,
                        timestamp=datetime.fromtimestamp(item[0] / 1000, tz=timezone.utc),
                        open=Decimal(str(item[1])),
                        high=Decimal(str(item[2])),
                        low=Decimal(str(item[3])),
                        close=Decimal(str(item[4])),
                        volume=Decimal(str(item[5])),
                        is_closed=True,
                    )
                )
        except (IndexError, TypeError, ValueError, InvalidOperation, ValidationError) as e:
            raise UpstreamUnavailableError(f"Malformed kline row for {symbol}: {e}") from e

        logger.debug(f"Fetched {len(klines)} {interval} klines for {symbol}")
        return klines
