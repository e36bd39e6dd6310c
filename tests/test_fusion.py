"""Tests for decision fusion."""

import itertools
import logging

import pytest

from core.analysis.fusion import (
    confidence_level,
    recommended_horizon,
    sentiment_direction,
    synthesize_recommendation,
    technical_direction,
)
from core.analysis.sentiment import normalize_sentiment
from core.models import (
    Confidence,
    Direction,
    ErrorKind,
    Horizon,
    MomentumSignal,
    ResultStatus,
    SentimentLabel,
    SentimentReading,
    TechnicalSignal,
    TrendLabel,
)

# Representative index value for each label
_LABEL_VALUES = {
    SentimentLabel.EXTREMELY_BEARISH: 10,
    SentimentLabel.BEARISH: 35,
    SentimentLabel.NEUTRAL: 50,
    SentimentLabel.BULLISH: 65,
    SentimentLabel.EXTREMELY_BULLISH: 90,
}


def _technical(trend: TrendLabel, momentum: MomentumSignal = MomentumSignal.NEUTRAL) -> TechnicalSignal:
    return TechnicalSignal(trend=trend, momentum_signal=momentum, symbol="BTC", rsi=50.0)


def _sentiment(label: SentimentLabel) -> SentimentReading:
    return normalize_sentiment(_LABEL_VALUES[label])


class TestTechnicalDirection:
    def test_bullish_trends_go_long(self):
        assert technical_direction(TrendLabel.BULLISH, MomentumSignal.NEUTRAL) == Direction.LONG
        assert technical_direction(TrendLabel.STRONGLY_BULLISH, MomentumSignal.NEUTRAL) == Direction.LONG

    def test_bearish_trends_go_short(self):
        assert technical_direction(TrendLabel.BEARISH, MomentumSignal.NEUTRAL) == Direction.SHORT
        assert technical_direction(TrendLabel.STRONGLY_BEARISH, MomentumSignal.NEUTRAL) == Direction.SHORT

    def test_neutral_trend_defaults_long(self):
        assert technical_direction(TrendLabel.NEUTRAL, MomentumSignal.NEUTRAL) == Direction.LONG

    def test_overbought_flips_long(self):
        assert technical_direction(TrendLabel.BULLISH, MomentumSignal.OVERBOUGHT) == Direction.SHORT
        assert technical_direction(TrendLabel.NEUTRAL, MomentumSignal.OVERBOUGHT) == Direction.SHORT

    def test_oversold_flips_short(self):
        assert technical_direction(TrendLabel.BEARISH, MomentumSignal.OVERSOLD) == Direction.LONG

    def test_override_only_against_direction(self):
        assert technical_direction(TrendLabel.BEARISH, MomentumSignal.OVERBOUGHT) == Direction.SHORT
        assert technical_direction(TrendLabel.BULLISH, MomentumSignal.OVERSOLD) == Direction.LONG


class TestSentimentDirection:
    @pytest.mark.parametrize(
        "label,expected",
        [
            (SentimentLabel.EXTREMELY_BEARISH, Direction.LONG),
            (SentimentLabel.BEARISH, Direction.SHORT),
            (SentimentLabel.NEUTRAL, Direction.LONG),
            (SentimentLabel.BULLISH, Direction.LONG),
            (SentimentLabel.EXTREMELY_BULLISH, Direction.SHORT),
        ],
    )
    def test_directions(self, label, expected):
        assert sentiment_direction(label) == expected


class TestHorizonAndConfidence:
    def test_long_term_needs_long_and_strong_bull(self):
        assert recommended_horizon(Direction.LONG, TrendLabel.STRONGLY_BULLISH) == Horizon.LONG_TERM
        assert recommended_horizon(Direction.SHORT, TrendLabel.STRONGLY_BULLISH) == Horizon.MEDIUM_TERM

    def test_short_term_needs_short_and_strong_bear(self):
        assert recommended_horizon(Direction.SHORT, TrendLabel.STRONGLY_BEARISH) == Horizon.SHORT_TERM
        assert recommended_horizon(Direction.LONG, TrendLabel.STRONGLY_BEARISH) == Horizon.MEDIUM_TERM

    def test_default_medium_term(self):
        assert recommended_horizon(Direction.LONG, TrendLabel.BULLISH) == Horizon.MEDIUM_TERM

    def test_confidence_levels(self):
        assert confidence_level(Direction.LONG, Direction.SHORT, TrendLabel.STRONGLY_BULLISH, SentimentLabel.BULLISH) == Confidence.LOW
        assert confidence_level(Direction.LONG, Direction.LONG, TrendLabel.STRONGLY_BULLISH, SentimentLabel.BULLISH) == Confidence.HIGH
        assert confidence_level(Direction.SHORT, Direction.SHORT, TrendLabel.BEARISH, SentimentLabel.EXTREMELY_BULLISH) == Confidence.HIGH
        assert confidence_level(Direction.LONG, Direction.LONG, TrendLabel.BULLISH, SentimentLabel.BULLISH) == Confidence.MEDIUM


class TestSynthesizeRecommendation:
    def test_overbought_with_extreme_greed(self):
        """Both sides flip to SHORT, agree, and the strong trend gives high confidence."""
        result = synthesize_recommendation(
            _technical(TrendLabel.STRONGLY_BULLISH, MomentumSignal.OVERBOUGHT),
            _sentiment(SentimentLabel.EXTREMELY_BULLISH),
        )

        assert result.status == ResultStatus.SUCCESS
        rec = result.recommendation
        assert rec.technical_direction == Direction.SHORT
        assert rec.sentiment_direction == Direction.SHORT
        assert rec.confidence == Confidence.HIGH
        assert rec.direction == Direction.SHORT
        assert rec.horizon == Horizon.MEDIUM_TERM

    def test_strong_bull_with_greed_is_long_term(self):
        result = synthesize_recommendation(
            _technical(TrendLabel.STRONGLY_BULLISH), _sentiment(SentimentLabel.BULLISH)
        )
        rec = result.recommendation
        assert rec.direction == Direction.LONG
        assert rec.horizon == Horizon.LONG_TERM
        assert rec.confidence == Confidence.HIGH

    def test_strong_bear_with_fear_is_short_term(self):
        result = synthesize_recommendation(
            _technical(TrendLabel.STRONGLY_BEARISH), _sentiment(SentimentLabel.BEARISH)
        )
        rec = result.recommendation
        assert rec.direction == Direction.SHORT
        assert rec.horizon == Horizon.SHORT_TERM
        assert rec.confidence == Confidence.HIGH

    def test_sentiment_never_overrides_technical(self):
        """Bullish technicals with fear: still LONG, only confidence drops."""
        result = synthesize_recommendation(
            _technical(TrendLabel.BULLISH), _sentiment(SentimentLabel.BEARISH)
        )
        rec = result.recommendation
        assert rec.direction == Direction.LONG
        assert rec.sentiment_direction == Direction.SHORT
        assert rec.confidence == Confidence.LOW

    def test_all_neutral(self):
        result = synthesize_recommendation(
            _technical(TrendLabel.NEUTRAL), _sentiment(SentimentLabel.NEUTRAL)
        )
        rec = result.recommendation
        assert rec.direction == Direction.LONG
        assert rec.confidence == Confidence.MEDIUM
        assert rec.horizon == Horizon.MEDIUM_TERM

    def test_invariants_over_all_inputs(self):
        for trend, momentum, label in itertools.product(TrendLabel, MomentumSignal, SentimentLabel):
            result = synthesize_recommendation(_technical(trend, momentum), _sentiment(label))
            rec = result.recommendation

            assert rec.direction == rec.technical_direction
            if rec.technical_direction != rec.sentiment_direction:
                assert rec.confidence == Confidence.LOW
            else:
                assert rec.confidence != Confidence.LOW

    def test_supporting_data(self):
        result = synthesize_recommendation(
            _technical(TrendLabel.BULLISH), _sentiment(SentimentLabel.BULLISH)
        )

        assert result.symbol == "BTC"
        assert result.supporting.trend == TrendLabel.BULLISH
        assert result.supporting.rsi == 50.0
        assert result.supporting.fear_greed_index == 65
        assert result.supporting.fear_greed_description == "Greed"
        assert result.supporting.sentiment_interpretation == "bullish"

    def test_fresh_recommendation_per_call(self):
        technical = _technical(TrendLabel.BULLISH)
        sentiment = _sentiment(SentimentLabel.BULLISH)

        first = synthesize_recommendation(technical, sentiment).recommendation
        second = synthesize_recommendation(technical, sentiment).recommendation

        assert first is not second
        assert second.produced_at >= first.produced_at

    def test_accepts_plain_mappings(self):
        result = synthesize_recommendation(
            {"trend": "strongly bearish", "momentum_signal": "oversold", "symbol": "ETH"},
            {"value": 20, "label": "extremely bearish"},
        )

        assert result.ok
        assert result.symbol == "ETH"
        assert result.recommendation.technical_direction == Direction.LONG
        assert result.recommendation.sentiment_direction == Direction.LONG
        assert result.recommendation.confidence == Confidence.HIGH


class TestMalformedInput:
    def test_missing_trend(self):
        result = synthesize_recommendation(
            {"momentum_signal": "neutral"}, _sentiment(SentimentLabel.NEUTRAL), symbol="BTC"
        )

        assert result.status == ResultStatus.ERROR
        assert not result.ok
        assert result.error == ErrorKind.MALFORMED_INPUT
        assert result.recommendation is None
        assert result.symbol == "BTC"
        assert "Incomplete" in result.message

    def test_missing_sentiment_label(self):
        result = synthesize_recommendation(_technical(TrendLabel.BULLISH), {"value": 50})
        assert result.error == ErrorKind.MALFORMED_INPUT

    def test_unknown_label(self):
        result = synthesize_recommendation(
            {"trend": "sideways", "momentum_signal": "neutral"}, _sentiment(SentimentLabel.NEUTRAL)
        )
        assert result.error == ErrorKind.MALFORMED_INPUT

    def test_none_payload(self):
        result = synthesize_recommendation(None, None)
        assert result.error == ErrorKind.MALFORMED_INPUT
        assert result.supporting is None


class TestFusionLogging:
    def test_debug_trace(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="core.analysis.fusion"):
            synthesize_recommendation(
                _technical(TrendLabel.BULLISH), _sentiment(SentimentLabel.BULLISH)
            )

        assert "Fused BTC: technical=LONG sentiment=LONG -> LONG (medium)" in caplog.text
