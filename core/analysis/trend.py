"""Trend, momentum and MACD classification.

Turns an IndicatorSet into categorical labels. Labels are always recomputed
from the indicator values they describe; nothing here keeps state.
"""

import logging

from core.models.analysis import AverageSnapshot, ShortTermSignal, TechnicalSignal
from core.models.config import AnalysisConfig, DEFAULT_ANALYSIS_CONFIG
from core.models.indicator import IndicatorSet, MacdValues
from core.models.signal import MomentumSignal, ShortTermCall, TrendLabel

logger = logging.getLogger(__name__)


def is_above(price: float, average: float | None) -> bool:
    """Whether price sits above a moving average.

    A missing average compares as zero, so any positive price reads as
    "above" when the series was too short for that period.
    """
    return price > (average if average is not None else 0.0)


def classify_position_trend(above_short: bool, above_medium: bool, above_long: bool) -> TrendLabel:
    """Trend from price position against three moving averages (first match wins)."""
    if above_short and above_medium and above_long:
        return TrendLabel.STRONGLY_BULLISH
    if above_short and above_medium:
        return TrendLabel.BULLISH
    if not above_short and not above_medium and not above_long:
        return TrendLabel.STRONGLY_BEARISH
    if not above_short and not above_medium:
        return TrendLabel.BEARISH
    return TrendLabel.NEUTRAL


def classify_short_term_trend(
    above_sma_fast: bool,
    above_sma_slow: bool,
    above_ema_fast: bool,
    above_ema_slow: bool,
) -> TrendLabel:
    """Trend from price position against two SMAs and two EMAs.

    A bullish pair is either both SMAs or both EMAs below price; all four
    make it strong. Bearish mirrors that.
    """
    flags = (above_sma_fast, above_sma_slow, above_ema_fast, above_ema_slow)

    if all(flags):
        return TrendLabel.STRONGLY_BULLISH
    if (above_sma_fast and above_sma_slow) or (above_ema_fast and above_ema_slow):
        return TrendLabel.BULLISH
    if not any(flags):
        return TrendLabel.STRONGLY_BEARISH
    if (not above_sma_fast and not above_sma_slow) or (
        not above_ema_fast and not above_ema_slow
    ):
        return TrendLabel.BEARISH
    return TrendLabel.NEUTRAL


def classify_momentum(
    rsi_value: float | None,
    oversold: float = 30.0,
    overbought: float = 70.0,
) -> MomentumSignal:
    """RSI zone; thresholds are inclusive and a missing RSI is neutral."""
    if rsi_value is None:
        return MomentumSignal.NEUTRAL
    if rsi_value <= oversold:
        return MomentumSignal.OVERSOLD
    if rsi_value >= overbought:
        return MomentumSignal.OVERBOUGHT
    return MomentumSignal.NEUTRAL


def classify_macd(
    values: MacdValues | None,
    current_price: float,
    noise_ratio: float = 0.0001,
) -> TrendLabel:
    """Label a MACD triple.

    The histogram has to clear ``noise_ratio * current_price`` in either
    direction. The label is strong only when the main line has the same
    sign as the histogram.
    """
    if values is None or not values.is_complete:
        return TrendLabel.NEUTRAL

    noise_floor = noise_ratio * current_price
    histogram = values.histogram

    if histogram > 0 and histogram > noise_floor:
        return TrendLabel.STRONGLY_BULLISH if values.macd > 0 else TrendLabel.BULLISH
    if histogram < 0 and abs(histogram) > noise_floor:
        return TrendLabel.STRONGLY_BEARISH if values.macd < 0 else TrendLabel.BEARISH
    return TrendLabel.NEUTRAL


def short_term_call(
    trend: TrendLabel,
    macd_label: TrendLabel,
    momentum: MomentumSignal,
) -> ShortTermCall:
    """Intraday call from short-term trend, MACD label and fast RSI zone."""
    if (trend.is_bullish and macd_label.is_bullish) or (
        momentum == MomentumSignal.OVERSOLD and trend.is_bullish
    ):
        return ShortTermCall.LONG
    if (trend.is_bearish and macd_label.is_bearish) or (
        momentum == MomentumSignal.OVERBOUGHT and trend.is_bearish
    ):
        return ShortTermCall.SHORT
    return ShortTermCall.NEUTRAL


def _snapshot(values: dict[int, float | None], current_price: float) -> AverageSnapshot:
    return AverageSnapshot(
        values=dict(values),
        above={period: is_above(current_price, value) for period, value in values.items()},
    )


def classify_short_term(
    indicators: IndicatorSet,
    current_price: float,
    config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
) -> ShortTermSignal:
    """Build the intraday block from SMA/EMA pairs, fast RSI and MACD."""
    sma_fast, sma_slow = config.short_sma_periods
    ema_fast, ema_slow = config.short_ema_periods

    sma_snapshot = _snapshot(
        {p: indicators.sma.get(p) for p in config.short_sma_periods}, current_price
    )
    ema_snapshot = _snapshot(
        {p: indicators.ema.get(p) for p in config.short_ema_periods}, current_price
    )

    trend = classify_short_term_trend(
        sma_snapshot.above[sma_fast],
        sma_snapshot.above[sma_slow],
        ema_snapshot.above[ema_fast],
        ema_snapshot.above[ema_slow],
    )
    macd_values = indicators.macd or MacdValues()
    macd_label = classify_macd(macd_values, current_price, config.macd_noise_ratio)

    fast_rsi = indicators.rsi.get(config.short_rsi_period)
    fast_momentum = classify_momentum(fast_rsi, config.rsi_oversold, config.rsi_overbought)

    return ShortTermSignal(
        sma=sma_snapshot,
        ema=ema_snapshot,
        rsi=fast_rsi,
        macd=macd_values,
        macd_signal=macd_label,
        trend=trend,
        recommendation=short_term_call(trend, macd_label, fast_momentum),
    )


def classify_trend(
    indicators: IndicatorSet,
    current_price: float,
    intraday: bool = False,
    config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
    symbol: str | None = None,
) -> TechnicalSignal:
    """
    Classify an IndicatorSet against the current price.

    Args:
        indicators: Values computed for the position (and, for intraday,
            short-term) horizons
        current_price: Latest close
        intraday: Also build the short-term block
        config: Periods and thresholds
        symbol: Carried through for reporting

    Returns:
        TechnicalSignal with trend and momentum labels
    """
    short_p, medium_p, long_p = config.trend_sma_periods
    sma_snapshot = _snapshot(
        {p: indicators.sma.get(p) for p in config.trend_sma_periods}, current_price
    )

    trend = classify_position_trend(
        sma_snapshot.above[short_p],
        sma_snapshot.above[medium_p],
        sma_snapshot.above[long_p],
    )

    rsi_value = indicators.rsi.get(config.rsi_period)
    momentum = classify_momentum(rsi_value, config.rsi_oversold, config.rsi_overbought)

    short_term = classify_short_term(indicators, current_price, config) if intraday else None

    logger.debug(
        f"Classified {symbol or 'series'}: trend={trend.value} momentum={momentum.value}"
    )

    return TechnicalSignal(
        trend=trend,
        momentum_signal=momentum,
        symbol=symbol,
        current_price=current_price,
        rsi=rsi_value,
        sma=sma_snapshot,
        short_term=short_term,
    )
