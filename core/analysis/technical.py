"""Price series -> indicators -> classified technical signal.

This module is pure business logic with no I/O dependencies.
"""

import logging

from core.analysis.trend import classify_trend
from core.indicators import IndicatorCalculator, sma
from core.models.config import AnalysisConfig, DEFAULT_ANALYSIS_CONFIG
from core.models.kline import PriceSeries
from core.models.results import ErrorKind, ResultStatus, TechnicalAnalysisResult

logger = logging.getLogger(__name__)


def long_sma_period(configured: int, length: int) -> int:
    """Window for the long trend average, shortened to fit the series.

    Uses at most ``length - 1`` closes and never fewer than one.
    """
    return max(1, min(configured, length - 1))


def analyze_series(
    series: PriceSeries,
    config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
    calculator: IndicatorCalculator | None = None,
) -> TechnicalAnalysisResult:
    """
    Run the full technical analysis for one series.

    Position indicators are always computed; the short-term block is added
    for intraday timeframes. The long trend average is shortened to
    ``len(series) - 1`` closes when the series is too short for it.

    Args:
        series: Closing prices for the requested timeframe
        config: Periods and thresholds
        calculator: Indicator calculator (a fresh one by default)

    Returns:
        TechnicalAnalysisResult; an empty series yields an
        insufficient_data error
    """
    if not series.closes:
        return TechnicalAnalysisResult.failure(
            ErrorKind.INSUFFICIENT_DATA,
            "No price data available",
            symbol=series.symbol,
        )

    calculator = calculator or IndicatorCalculator()
    current_price = series.current_price
    intraday = series.timeframe.is_intraday

    indicators = calculator.calculate(series.closes, config.position_horizons())
    long_p = config.trend_sma_periods[-1]
    window = long_sma_period(long_p, len(series))
    if window != long_p:
        # Reported under the configured period
        indicators = indicators.model_copy(
            update={"sma": {**indicators.sma, long_p: sma(series.closes, window)}}
        )
        logger.debug(f"SMA{long_p} shortened to {window} closes for {series.symbol}")

    if intraday:
        indicators = indicators.merged(
            calculator.calculate(series.closes, config.short_term_horizons())
        )

    signal = classify_trend(
        indicators,
        current_price,
        intraday=intraday,
        config=config,
        symbol=series.symbol,
    )

    logger.debug(
        f"Analyzed {series.symbol} {series.timeframe.value}: "
        f"{len(series)} closes, trend={signal.trend.value}"
    )

    return TechnicalAnalysisResult(
        status=ResultStatus.SUCCESS,
        symbol=series.symbol,
        current_price=current_price,
        indicators=indicators,
        signal=signal,
    )
