"""Discriminated success/error results returned across the engine.

Callers check ``status`` (or ``ok``) before reading payload fields; payload
fields are None on error.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from core.models.analysis import (
    Recommendation,
    SentimentReading,
    SupportingData,
    TechnicalSignal,
)
from core.models.indicator import IndicatorSet
from core.models.kline import PriceSeries


class ResultStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class ErrorKind(str, Enum):
    """Why an operation produced no payload."""

    INSUFFICIENT_DATA = "insufficient_data"
    MALFORMED_INPUT = "malformed_input"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"


class OperationResult(BaseModel):
    """Common status envelope."""

    model_config = ConfigDict(frozen=True)

    status: ResultStatus = ResultStatus.SUCCESS
    symbol: str | None = None
    error: ErrorKind | None = None
    message: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @classmethod
    def failure(cls, error: ErrorKind, message: str, symbol: str | None = None):
        return cls(
            status=ResultStatus.ERROR,
            symbol=symbol,
            error=error,
            message=message,
        )


class PriceQuoteResult(OperationResult):
    price: Decimal | None = None
    currency: str | None = None


class PriceHistoryResult(OperationResult):
    series: PriceSeries | None = None


class TechnicalAnalysisResult(OperationResult):
    current_price: float | None = None
    indicators: IndicatorSet | None = None
    signal: TechnicalSignal | None = None


class SentimentResult(OperationResult):
    sentiment: SentimentReading | None = None


class SynthesisResult(OperationResult):
    recommendation: Recommendation | None = None
    supporting: SupportingData | None = None
