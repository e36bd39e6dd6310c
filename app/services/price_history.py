"""Historical closing prices from Binance klines."""

import logging
from datetime import datetime, timedelta, timezone

from app.clients.binance_rest import BinanceRestClient, format_symbol
from app.clients.errors import UpstreamUnavailableError
from core.models import ErrorKind, PriceHistoryResult, PriceSeries, Timeframe

logger = logging.getLogger(__name__)

# timeframe -> (Binance interval, max lookback days)
_INTRADAY_PLANS: dict[Timeframe, tuple[str, int]] = {
    Timeframe.ONE_MINUTE: ("1m", 1),
    Timeframe.FIVE_MINUTES: ("5m", 3),
    Timeframe.FIFTEEN_MINUTES: ("15m", 7),
    Timeframe.HOURLY: ("1h", 14),
}

# Daily requests longer than this switch to weekly candles
WEEKLY_THRESHOLD_DAYS = 90


def plan_request(timeframe: Timeframe, days: int) -> tuple[str, int]:
    """Return (interval, lookback days) for a timeframe and requested window."""
    if timeframe in _INTRADAY_PLANS:
        interval, max_days = _INTRADAY_PLANS[timeframe]
        return interval, min(days, max_days)
    interval = "1w" if days > WEEKLY_THRESHOLD_DAYS else "1d"
    return interval, days


class PriceHistoryService:
    """Builds PriceSeries for a symbol/timeframe from Binance klines."""

    def __init__(self, client: BinanceRestClient, quote_asset: str = "USDC"):
        self.client = client
        self.quote_asset = quote_asset

    async def get_price_series(
        self,
        symbol: str,
        timeframe: Timeframe,
        days: int = 30,
        now: datetime | None = None,
    ) -> PriceHistoryResult:
        """
        Fetch closing prices ending now.

        Args:
            symbol: Base asset (e.g., "BTC")
            timeframe: Analysis timeframe
            days: Requested lookback; intraday timeframes cap it
            now: End of the window (defaults to current UTC time)

        Returns:
            PriceHistoryResult with the series, or an error result
        """
        if days <= 0:
            return PriceHistoryResult.failure(
                ErrorKind.MALFORMED_INPUT,
                f"days must be positive, got {days}",
                symbol=symbol,
            )

        exchange_symbol = format_symbol(symbol, self.quote_asset)
        interval, lookback_days = plan_request(timeframe, days)
        end_time = now or datetime.now(timezone.utc)
        start_time = end_time - timedelta(days=lookback_days)

        logger.info(
            f"Fetching {interval} klines for {exchange_symbol} "
            f"({lookback_days}d, timeframe={timeframe.value})"
        )

        try:
            klines = await self.client.get_klines(
                symbol=exchange_symbol,
                interval=interval,
                start_time=start_time,
                end_time=end_time,
            )
        except UpstreamUnavailableError as e:
            if e.status_code == 400:
                message = (
                    f"Could not find historical data for {symbol} on Binance. "
                    "Symbol may not be supported."
                )
            else:
                message = f"Failed to fetch historical data: {e}"
            logger.warning(message)
            return PriceHistoryResult.failure(
                ErrorKind.UPSTREAM_UNAVAILABLE, message, symbol=symbol
            )

        if not klines:
            return PriceHistoryResult.failure(
                ErrorKind.INSUFFICIENT_DATA, "No price data available", symbol=symbol
            )

        series = PriceSeries.from_klines(
            klines,
            symbol=symbol,
            timeframe=timeframe,
            interval=interval,
            lookback_days=lookback_days,
        )
        return PriceHistoryResult(symbol=symbol, series=series)
