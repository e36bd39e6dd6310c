"""Tests for Fear & Greed normalization."""

from datetime import datetime, timezone

import pytest

from core.analysis.sentiment import INTERPRETATIONS, normalize_sentiment, sentiment_band
from core.models import SentimentIndex, SentimentLabel


class TestSentimentBands:
    @pytest.mark.parametrize(
        "value,label,description",
        [
            (0, SentimentLabel.EXTREMELY_BEARISH, "Extreme Fear"),
            (25, SentimentLabel.EXTREMELY_BEARISH, "Extreme Fear"),
            (25.5, SentimentLabel.BEARISH, "Fear"),
            (45, SentimentLabel.BEARISH, "Fear"),
            (46, SentimentLabel.NEUTRAL, "Neutral"),
            (55, SentimentLabel.NEUTRAL, "Neutral"),
            (56, SentimentLabel.BULLISH, "Greed"),
            (75, SentimentLabel.BULLISH, "Greed"),
            (76, SentimentLabel.EXTREMELY_BULLISH, "Extreme Greed"),
            (100, SentimentLabel.EXTREMELY_BULLISH, "Extreme Greed"),
        ],
    )
    def test_band_edges(self, value, label, description):
        assert sentiment_band(value) == (label, description)

    @pytest.mark.parametrize("value", [-1, 100.5, 150])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ValueError):
            sentiment_band(value)


class TestNormalizeSentiment:
    def test_interpretation_follows_label(self):
        for value in (10, 30, 50, 60, 90):
            reading = normalize_sentiment(value)
            assert reading.interpretation == INTERPRETATIONS[reading.label]

    def test_extreme_phrases(self):
        assert normalize_sentiment(10).interpretation == "extremely bearish (potentially oversold)"
        assert normalize_sentiment(90).interpretation == "extremely bullish (potentially overbought)"

    def test_index_metadata_carried(self):
        as_of = datetime(2024, 5, 1, tzinfo=timezone.utc)
        index = SentimentIndex(value=72, classification="Greed", as_of=as_of)

        reading = normalize_sentiment(index)

        assert reading.value == 72
        assert reading.label == SentimentLabel.BULLISH
        assert reading.description == "Greed"
        assert reading.classification == "Greed"
        assert reading.as_of == as_of

    def test_bare_value_out_of_range(self):
        with pytest.raises(ValueError):
            normalize_sentiment(101)
