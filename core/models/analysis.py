"""Technical, sentiment and recommendation models."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from core.models.indicator import MacdValues
from core.models.signal import (
    Confidence,
    Direction,
    Horizon,
    MomentumSignal,
    SentimentLabel,
    ShortTermCall,
    TrendLabel,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AverageSnapshot(BaseModel):
    """Moving average values and whether price sits above each one."""

    model_config = ConfigDict(frozen=True)

    values: dict[int, float | None] = Field(default_factory=dict)
    above: dict[int, bool] = Field(default_factory=dict)


class ShortTermSignal(BaseModel):
    """Intraday indicator block."""

    model_config = ConfigDict(frozen=True)

    sma: AverageSnapshot
    ema: AverageSnapshot
    rsi: float | None = None
    macd: MacdValues = Field(default_factory=MacdValues)
    macd_signal: TrendLabel = TrendLabel.NEUTRAL
    trend: TrendLabel = TrendLabel.NEUTRAL
    recommendation: ShortTermCall = ShortTermCall.NEUTRAL


class TechnicalSignal(BaseModel):
    """Classified technical view of one price series.

    ``trend`` and ``momentum_signal`` are the only fields fusion needs;
    everything else is carried along for reporting.
    """

    model_config = ConfigDict(frozen=True)

    trend: TrendLabel
    momentum_signal: MomentumSignal
    symbol: str | None = None
    current_price: float | None = None
    rsi: float | None = None
    sma: AverageSnapshot | None = None
    short_term: ShortTermSignal | None = None


class SentimentIndex(BaseModel):
    """Raw Fear & Greed reading as published upstream."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(ge=0, le=100)
    classification: str = ""
    as_of: datetime | None = None
    time_until_update: str | None = None


class SentimentReading(BaseModel):
    """Sentiment index mapped onto a label."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(ge=0, le=100)
    label: SentimentLabel
    description: str = ""
    interpretation: str = ""
    classification: str = ""
    as_of: datetime | None = None


class Recommendation(BaseModel):
    """Directional call produced by one synthesis; never reused."""

    model_config = ConfigDict(frozen=True)

    direction: Direction
    confidence: Confidence
    horizon: Horizon
    technical_direction: Direction
    sentiment_direction: Direction
    produced_at: datetime = Field(default_factory=_utcnow)


class SupportingData(BaseModel):
    """Inputs that led to a recommendation."""

    model_config = ConfigDict(frozen=True)

    trend: TrendLabel
    momentum_signal: MomentumSignal
    rsi: float | None = None
    sma: AverageSnapshot | None = None
    sentiment: SentimentLabel
    sentiment_interpretation: str = ""
    fear_greed_index: float
    fear_greed_description: str = ""
