"""K-line (candlestick) and price series data models."""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Timeframe(str, Enum):
    """Analysis timeframe requested by the caller."""

    ONE_MINUTE = "1m"
    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"
    HOURLY = "hourly"
    DAILY = "daily"

    @property
    def is_intraday(self) -> bool:
        """Intraday timeframes get the short-term indicator block."""
        return self is not Timeframe.DAILY


class Kline(BaseModel):
    """K-line (candlestick) data model."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    timeframe: str
    timestamp: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    is_closed: bool = True


class PriceSeries(BaseModel):
    """Closing prices for one symbol, oldest first.

    Missing candles simply shrink the series; no gap filling is done.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    timeframe: Timeframe
    interval: str
    lookback_days: int
    closes: tuple[float, ...]
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("closes", mode="before")
    @classmethod
    def _coerce_closes(cls, value):
        return tuple(float(v) for v in value)

    @classmethod
    def from_klines(
        cls,
        klines: Sequence[Kline],
        symbol: str,
        timeframe: Timeframe,
        interval: str,
        lookback_days: int,
    ) -> "PriceSeries":
        """Build a series from klines, ordered by candle open time."""
        ordered = sorted(klines, key=lambda k: k.timestamp)
        return cls(
            symbol=symbol,
            timeframe=timeframe,
            interval=interval,
            lookback_days=lookback_days,
            closes=[k.close for k in ordered],
        )

    @property
    def current_price(self) -> float | None:
        """Latest close, or None for an empty series."""
        return self.closes[-1] if self.closes else None

    def __len__(self) -> int:
        return len(self.closes)
