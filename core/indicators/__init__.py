"""Technical indicators (pure math, no I/O)."""

from core.indicators.indicators import (
    sma,
    ema,
    ema_series,
    rsi,
    macd,
    macd_signal_line,
    compute_indicators,
    IndicatorCalculator,
)

__all__ = [
    "sma",
    "ema",
    "ema_series",
    "rsi",
    "macd",
    "macd_signal_line",
    "compute_indicators",
    "IndicatorCalculator",
]
