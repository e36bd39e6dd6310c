"""Signal classification and decision fusion."""

from core.analysis.trend import (
    is_above,
    classify_position_trend,
    classify_short_term_trend,
    classify_momentum,
    classify_macd,
    classify_short_term,
    classify_trend,
    short_term_call,
)
from core.analysis.sentiment import normalize_sentiment, sentiment_band, INTERPRETATIONS
from core.analysis.fusion import (
    technical_direction,
    sentiment_direction,
    recommended_horizon,
    confidence_level,
    synthesize_recommendation,
)
from core.analysis.technical import analyze_series, long_sma_period

__all__ = [
    # Trend
    "is_above",
    "classify_position_trend",
    "classify_short_term_trend",
    "classify_momentum",
    "classify_macd",
    "classify_short_term",
    "classify_trend",
    "short_term_call",
    # Sentiment
    "normalize_sentiment",
    "sentiment_band",
    "INTERPRETATIONS",
    # Fusion
    "technical_direction",
    "sentiment_direction",
    "recommended_horizon",
    "confidence_level",
    "synthesize_recommendation",
    # Pipeline
    "analyze_series",
    "long_sma_period",
]
