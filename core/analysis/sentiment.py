"""Fear & Greed index to sentiment label."""

from core.models.analysis import SentimentIndex, SentimentReading
from core.models.signal import SentimentLabel

# (upper bound inclusive, label, index description)
_BANDS: tuple[tuple[float, SentimentLabel, str], ...] = (
    (25, SentimentLabel.EXTREMELY_BEARISH, "Extreme Fear"),
    (45, SentimentLabel.BEARISH, "Fear"),
    (55, SentimentLabel.NEUTRAL, "Neutral"),
    (75, SentimentLabel.BULLISH, "Greed"),
    (100, SentimentLabel.EXTREMELY_BULLISH, "Extreme Greed"),
)

INTERPRETATIONS: dict[SentimentLabel, str] = {
    SentimentLabel.EXTREMELY_BEARISH: "extremely bearish (potentially oversold)",
    SentimentLabel.BEARISH: "bearish",
    SentimentLabel.NEUTRAL: "neutral",
    SentimentLabel.BULLISH: "bullish",
    SentimentLabel.EXTREMELY_BULLISH: "extremely bullish (potentially overbought)",
}


def sentiment_band(value: float) -> tuple[SentimentLabel, str]:
    """Return (label, description) for an index value in [0, 100].

    Raises:
        ValueError: If the value is outside [0, 100].
    """
    if not 0 <= value <= 100:
        raise ValueError(f"sentiment index must be within [0, 100], got {value}")

    for upper, label, description in _BANDS[:-1]:
        if value <= upper:
            return label, description

    _, label, description = _BANDS[-1]
    return label, description


def normalize_sentiment(index: SentimentIndex | float) -> SentimentReading:
    """Map a Fear & Greed reading (or bare value) onto a SentimentReading.

    Raises:
        ValueError: If the value is outside [0, 100] (pydantic's
            ValidationError is a ValueError).
    """
    if not isinstance(index, SentimentIndex):
        index = SentimentIndex(value=index)

    label, description = sentiment_band(index.value)
    return SentimentReading(
        value=index.value,
        label=label,
        description=description,
        interpretation=INTERPRETATIONS[label],
        classification=index.classification,
        as_of=index.as_of,
    )
