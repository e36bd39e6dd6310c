"""Decision fusion: technical signal + sentiment -> one recommendation.

Policy:
- Technical direction comes from the position trend, then an RSI override
  (overbought turns LONG into SHORT, oversold turns SHORT into LONG).
- Sentiment direction follows the sentiment side, except that the extreme
  labels flip it (extreme greed reads as overbought, extreme fear as
  oversold).
- The final direction is always the technical direction. Agreement between
  the two only moves confidence and horizon.

This module is pure business logic with no I/O dependencies.
"""

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from core.models.analysis import (
    Recommendation,
    SentimentReading,
    SupportingData,
    TechnicalSignal,
)
from core.models.results import ErrorKind, ResultStatus, SynthesisResult
from core.models.signal import (
    Confidence,
    Direction,
    Horizon,
    MomentumSignal,
    SentimentLabel,
    TrendLabel,
)

logger = logging.getLogger(__name__)


def technical_direction(trend: TrendLabel, momentum: MomentumSignal) -> Direction:
    """Direction from trend, with the RSI override applied.

    Neutral trends default to LONG.
    """
    direction = Direction.SHORT if trend.is_bearish else Direction.LONG

    if momentum == MomentumSignal.OVERBOUGHT and direction == Direction.LONG:
        return Direction.SHORT
    if momentum == MomentumSignal.OVERSOLD and direction == Direction.SHORT:
        return Direction.LONG
    return direction


def sentiment_direction(label: SentimentLabel) -> Direction:
    """Direction implied by sentiment; extremes are read as contrarian."""
    if label.is_bullish:
        return Direction.SHORT if label == SentimentLabel.EXTREMELY_BULLISH else Direction.LONG
    if label.is_bearish:
        return Direction.LONG if label == SentimentLabel.EXTREMELY_BEARISH else Direction.SHORT
    return Direction.LONG


def recommended_horizon(direction: Direction, trend: TrendLabel) -> Horizon:
    if direction == Direction.LONG and trend == TrendLabel.STRONGLY_BULLISH:
        return Horizon.LONG_TERM
    if direction == Direction.SHORT and trend == TrendLabel.STRONGLY_BEARISH:
        return Horizon.SHORT_TERM
    return Horizon.MEDIUM_TERM


def confidence_level(
    technical: Direction,
    sentiment: Direction,
    trend: TrendLabel,
    label: SentimentLabel,
) -> Confidence:
    if technical != sentiment:
        return Confidence.LOW
    if trend.is_strong or label.is_extreme:
        return Confidence.HIGH
    return Confidence.MEDIUM


def _validate_inputs(
    technical: TechnicalSignal | Mapping[str, Any],
    sentiment: SentimentReading | Mapping[str, Any],
) -> tuple[TechnicalSignal, SentimentReading]:
    if not isinstance(technical, TechnicalSignal):
        technical = TechnicalSignal.model_validate(technical)
    if not isinstance(sentiment, SentimentReading):
        sentiment = SentimentReading.model_validate(sentiment)
    return technical, sentiment


def synthesize_recommendation(
    technical: TechnicalSignal | Mapping[str, Any],
    sentiment: SentimentReading | Mapping[str, Any],
    symbol: str | None = None,
) -> SynthesisResult:
    """
    Combine a technical signal and a sentiment reading.

    Never raises for bad payloads: structurally incomplete inputs come back
    as an error result with ``error=malformed_input``.

    Args:
        technical: TechnicalSignal or a mapping with at least ``trend`` and
            ``momentum_signal``
        sentiment: SentimentReading or a mapping with at least ``value`` and
            ``label``
        symbol: Overrides the symbol carried by ``technical``

    Returns:
        SynthesisResult holding a fresh Recommendation on success
    """
    try:
        technical, sentiment = _validate_inputs(technical, sentiment)
    except (ValidationError, TypeError) as e:
        logger.warning(f"Rejected fusion input: {e}")
        return SynthesisResult.failure(
            ErrorKind.MALFORMED_INPUT,
            f"Incomplete technical or sentiment data: {e}",
            symbol=symbol,
        )

    symbol = symbol or technical.symbol
    trend = technical.trend

    tech_dir = technical_direction(trend, technical.momentum_signal)
    sent_dir = sentiment_direction(sentiment.label)
    final = tech_dir

    recommendation = Recommendation(
        direction=final,
        confidence=confidence_level(tech_dir, sent_dir, trend, sentiment.label),
        horizon=recommended_horizon(final, trend),
        technical_direction=tech_dir,
        sentiment_direction=sent_dir,
    )

    logger.debug(
        f"Fused {symbol}: technical={tech_dir.value} sentiment={sent_dir.value} "
        f"-> {final.value} ({recommendation.confidence.value})"
    )

    return SynthesisResult(
        status=ResultStatus.SUCCESS,
        symbol=symbol,
        recommendation=recommendation,
        supporting=SupportingData(
            trend=trend,
            momentum_signal=technical.momentum_signal,
            rsi=technical.rsi,
            sma=technical.sma,
            sentiment=sentiment.label,
            sentiment_interpretation=sentiment.interpretation,
            fear_greed_index=sentiment.value,
            fear_greed_description=sentiment.description,
        ),
    )
