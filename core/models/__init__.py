"""Data models."""

from core.models.kline import Kline, PriceSeries, Timeframe
from core.models.signal import (
    Confidence,
    Direction,
    Horizon,
    MomentumSignal,
    SentimentLabel,
    ShortTermCall,
    TrendLabel,
)
from core.models.indicator import HorizonSet, IndicatorSet, MacdValues
from core.models.analysis import (
    AverageSnapshot,
    Recommendation,
    SentimentIndex,
    SentimentReading,
    ShortTermSignal,
    SupportingData,
    TechnicalSignal,
)
from core.models.results import (
    ErrorKind,
    OperationResult,
    PriceHistoryResult,
    PriceQuoteResult,
    ResultStatus,
    SentimentResult,
    SynthesisResult,
    TechnicalAnalysisResult,
)
from core.models.config import AnalysisConfig, DEFAULT_ANALYSIS_CONFIG

__all__ = [
    # Market data
    "Kline",
    "PriceSeries",
    "Timeframe",
    # Labels
    "Confidence",
    "Direction",
    "Horizon",
    "MomentumSignal",
    "SentimentLabel",
    "ShortTermCall",
    "TrendLabel",
    # Indicators
    "HorizonSet",
    "IndicatorSet",
    "MacdValues",
    # Analysis
    "AverageSnapshot",
    "Recommendation",
    "SentimentIndex",
    "SentimentReading",
    "ShortTermSignal",
    "SupportingData",
    "TechnicalSignal",
    # Results
    "ErrorKind",
    "OperationResult",
    "PriceHistoryResult",
    "PriceQuoteResult",
    "ResultStatus",
    "SentimentResult",
    "SynthesisResult",
    "TechnicalAnalysisResult",
    # Config
    "AnalysisConfig",
    "DEFAULT_ANALYSIS_CONFIG",
]
