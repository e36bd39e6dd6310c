"""Signal labels and trade direction enums."""

from enum import Enum


class Direction(str, Enum):
    """Trade direction."""

    LONG = "LONG"
    SHORT = "SHORT"


class TrendLabel(str, Enum):
    """Categorical trend derived from price position against moving averages."""

    STRONGLY_BULLISH = "strongly bullish"
    BULLISH = "bullish"
    NEUTRAL = "neutral"
    BEARISH = "bearish"
    STRONGLY_BEARISH = "strongly bearish"

    @property
    def is_bullish(self) -> bool:
        return self in (TrendLabel.STRONGLY_BULLISH, TrendLabel.BULLISH)

    @property
    def is_bearish(self) -> bool:
        return self in (TrendLabel.STRONGLY_BEARISH, TrendLabel.BEARISH)

    @property
    def is_strong(self) -> bool:
        return self in (TrendLabel.STRONGLY_BULLISH, TrendLabel.STRONGLY_BEARISH)


class MomentumSignal(str, Enum):
    """RSI zone."""

    OVERSOLD = "oversold"
    NEUTRAL = "neutral"
    OVERBOUGHT = "overbought"


class ShortTermCall(str, Enum):
    """Short-horizon call for intraday timeframes."""

    LONG = "LONG"
    SHORT = "SHORT"
    NEUTRAL = "neutral"


class SentimentLabel(str, Enum):
    """Market sentiment derived from the Fear & Greed index."""

    EXTREMELY_BEARISH = "extremely bearish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"
    BULLISH = "bullish"
    EXTREMELY_BULLISH = "extremely bullish"

    @property
    def is_bullish(self) -> bool:
        return self in (SentimentLabel.EXTREMELY_BULLISH, SentimentLabel.BULLISH)

    @property
    def is_bearish(self) -> bool:
        return self in (SentimentLabel.EXTREMELY_BEARISH, SentimentLabel.BEARISH)

    @property
    def is_extreme(self) -> bool:
        return self in (
            SentimentLabel.EXTREMELY_BULLISH,
            SentimentLabel.EXTREMELY_BEARISH,
        )


class Confidence(str, Enum):
    """Confidence level of a recommendation."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Horizon(str, Enum):
    """Suggested holding horizon."""

    SHORT_TERM = "short-term"
    MEDIUM_TERM = "medium-term"
    LONG_TERM = "long-term"
