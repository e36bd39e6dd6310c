"""End-to-end market analysis: quote, technicals, sentiment, recommendation.

Every call fetches fresh data; results are never cached between requests.
"""

import asyncio
import logging

from app.clients.binance_rest import BinanceRestClient, format_symbol
from app.clients.errors import UpstreamUnavailableError
from app.clients.fear_greed import FearGreedClient
from app.config import Settings, get_settings
from app.services.price_history import PriceHistoryService
from core.analysis import analyze_series, normalize_sentiment, synthesize_recommendation
from core.models import (
    AnalysisConfig,
    ErrorKind,
    PriceQuoteResult,
    SentimentResult,
    SynthesisResult,
    TechnicalAnalysisResult,
    Timeframe,
)

logger = logging.getLogger(__name__)


class MarketAnalysisService:
    """Runs the signal synthesis pipeline against live data sources."""

    def __init__(
        self,
        binance: BinanceRestClient | None = None,
        fear_greed: FearGreedClient | None = None,
        settings: Settings | None = None,
        config: AnalysisConfig | None = None,
    ):
        self.settings = settings or get_settings()
        self.config = config or AnalysisConfig()
        self.binance = binance or BinanceRestClient(
            base_url=self.settings.binance_base_url,
            api_key=self.settings.binance_api_key,
            timeout=self.settings.http_timeout,
            calls_per_minute=self.settings.requests_per_minute,
        )
        self.fear_greed = fear_greed or FearGreedClient(
            url=self.settings.fear_greed_url,
            timeout=self.settings.http_timeout,
        )
        self.price_history = PriceHistoryService(
            self.binance, quote_asset=self.settings.quote_asset
        )

    async def __aenter__(self) -> "MarketAnalysisService":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def close(self) -> None:
        """Close both HTTP clients."""
        await self.binance.close()
        await self.fear_greed.close()

    async def get_price(self, symbol: str) -> PriceQuoteResult:
        """Latest traded price for ``symbol`` in the price quote asset."""
        exchange_symbol = format_symbol(symbol, self.settings.price_quote_asset)
        logger.info(f"Fetching price for {exchange_symbol}")
        try:
            price = await self.binance.get_ticker_price(exchange_symbol)
        except UpstreamUnavailableError as e:
            if e.status_code == 400:
                message = (
                    f"Could not find price data for {symbol} on Binance. "
                    "Symbol may not be supported."
                )
            else:
                message = f"Failed to fetch price data: {e}"
            logger.warning(message)
            return PriceQuoteResult.failure(
                ErrorKind.UPSTREAM_UNAVAILABLE, message, symbol=symbol
            )

        return PriceQuoteResult(
            symbol=symbol, price=price, currency=self.settings.price_quote_asset
        )

    async def analyze_technical(
        self,
        symbol: str,
        timeframe: Timeframe = Timeframe.DAILY,
        days: int = 30,
    ) -> TechnicalAnalysisResult:
        """Fetch price history and classify it."""
        history = await self.price_history.get_price_series(symbol, timeframe, days)
        if not history.ok:
            return TechnicalAnalysisResult.failure(
                history.error, history.message, symbol=symbol
            )
        return analyze_series(history.series, self.config)

    async def analyze_sentiment(self, symbol: str) -> SentimentResult:
        """Current market-wide sentiment; ``symbol`` is only echoed back."""
        logger.info(f"Analyzing market sentiment for {symbol}")
        try:
            index = await self.fear_greed.get_index()
        except UpstreamUnavailableError as e:
            logger.warning(f"Sentiment unavailable: {e}")
            return SentimentResult.failure(
                ErrorKind.UPSTREAM_UNAVAILABLE, str(e), symbol=symbol
            )
        return SentimentResult(symbol=symbol, sentiment=normalize_sentiment(index))

    async def recommend(
        self,
        symbol: str,
        timeframe: Timeframe = Timeframe.DAILY,
        days: int = 30,
    ) -> SynthesisResult:
        """
        Produce a LONG/SHORT recommendation.

        Price history and sentiment are fetched concurrently. If either
        fails, the error is returned with no recommendation attached.
        """
        technical, sentiment = await asyncio.gather(
            self.analyze_technical(symbol, timeframe, days),
            self.analyze_sentiment(symbol),
        )

        for partial in (technical, sentiment):
            if not partial.ok:
                return SynthesisResult.failure(
                    partial.error, partial.message, symbol=symbol
                )

        result = synthesize_recommendation(
            technical.signal, sentiment.sentiment, symbol=symbol
        )
        if result.ok:
            rec = result.recommendation
            logger.info(
                f"{symbol} {timeframe.value}: {rec.direction.value} "
                f"(confidence={rec.confidence.value}, horizon={rec.horizon.value})"
            )
        return result
