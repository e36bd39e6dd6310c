"""Technical indicators for signal synthesis.

Every function returns a single value for the latest bar, or None when the
series is too short. None is "insufficient data" and must not be read as
zero.

Two behaviours differ from textbook formulas:

1. ``ema`` is seeded with the first price and runs over the whole series,
   not just the last ``period`` points.
2. ``macd_signal_line`` smooths a zero-padded prefix followed by the single
   current MACD value, not a history of MACD values.
"""

import logging
from typing import Sequence

import numpy as np

from core.models.indicator import HorizonSet, IndicatorSet, MacdValues

logger = logging.getLogger(__name__)

MACD_FAST_PERIOD = 12
MACD_SLOW_PERIOD = 26
MACD_SIGNAL_PERIOD = 9


def _to_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray([float(v) for v in values], dtype=np.float64)


def sma(values: Sequence[float], period: int) -> float | None:
    """
    Calculate Simple Moving Average of the last ``period`` values.

    Args:
        values: Closing prices, oldest first
        period: SMA period

    Returns:
        Mean of the last ``period`` values, or None if fewer are available
    """
    if len(values) < period:
        return None

    arr = _to_array(values)
    return float(np.mean(arr[-period:]))


def ema_series(values: Sequence[float], period: int) -> list[float]:
    """
    Run the EMA recurrence over the full series.

    ema[0] = price[0]
    ema[i] = price[i] * k + ema[i-1] * (1 - k),  k = 2 / (period + 1)

    Args:
        values: Closing prices, oldest first
        period: EMA period

    Returns:
        EMA value at every index (empty list for empty input)
    """
    if len(values) == 0:
        return []

    arr = _to_array(values)
    k = 2.0 / (period + 1)

    result = np.empty_like(arr)
    result[0] = arr[0]
    for i in range(1, len(arr)):
        result[i] = arr[i] * k + result[i - 1] * (1 - k)

    return result.tolist()


def ema(values: Sequence[float], period: int) -> float | None:
    """
    Calculate Exponential Moving Average for the latest bar.

    Seeded with the first price and applied over the full history, so the
    result depends on everything supplied, not only the last ``period``
    values.

    Args:
        values: Closing prices, oldest first
        period: EMA period

    Returns:
        Latest EMA value, or None if fewer than ``period`` values
    """
    if len(values) < period:
        return None
    return ema_series(values, period)[-1]


def rsi(values: Sequence[float], period: int = 14) -> float | None:
    """
    Calculate the Relative Strength Index over the last ``period`` deltas.

    RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    A zero average loss yields exactly 100.

    Args:
        values: Closing prices, oldest first
        period: Number of price changes to average

    Returns:
        RSI in [0, 100], or None unless more than ``period`` values exist
    """
    if len(values) <= period:
        return None

    changes = np.diff(_to_array(values))[-period:]
    gains = np.where(changes > 0, changes, 0.0)
    losses = np.where(changes < 0, -changes, 0.0)

    avg_gain = float(np.sum(gains)) / period
    avg_loss = float(np.sum(losses)) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def macd_signal_line(macd_value: float, period: int = MACD_SIGNAL_PERIOD) -> float:
    """
    Smooth the MACD value into a signal line.

    The EMA runs over ``period - 1`` zeros followed by ``macd_value``. With
    the seed at zero only the last step contributes, so the result is
    ``macd_value * 2 / (period + 1)``.
    """
    padded = [0.0] * (period - 1) + [macd_value]
    return ema_series(padded, period)[-1]


def macd(values: Sequence[float]) -> MacdValues:
    """
    Calculate MACD main line, signal line and histogram.

    main = EMA(12) - EMA(26)
    signal = macd_signal_line(main)
    histogram = main - signal

    Args:
        values: Closing prices, oldest first

    Returns:
        MacdValues with all fields None when fewer than 26 values
    """
    if len(values) < MACD_SLOW_PERIOD:
        return MacdValues()

    fast = ema(values, MACD_FAST_PERIOD)
    slow = ema(values, MACD_SLOW_PERIOD)
    main = fast - slow
    signal = macd_signal_line(main)

    return MacdValues(macd=main, signal=signal, histogram=main - signal)


# =============================================================================
# IndicatorCalculator class
# =============================================================================

class IndicatorCalculator:
    """Computes the indicators named in a HorizonSet for one series.

    Each indicator is computed on its own, so a period that lacks data only
    blanks that one value.
    """

    def calculate(
        self,
        closes: Sequence[float],
        horizons: HorizonSet,
    ) -> IndicatorSet:
        """
        Calculate all requested indicators for the latest bar.

        Args:
            closes: Closing prices, oldest first
            horizons: Periods to compute

        Returns:
            IndicatorSet with None for every value lacking data
        """
        indicator_set = IndicatorSet(
            sma={p: sma(closes, p) for p in horizons.sma_periods},
            ema={p: ema(closes, p) for p in horizons.ema_periods},
            rsi={p: rsi(closes, p) for p in horizons.rsi_periods},
            macd=macd(closes) if horizons.include_macd else None,
        )

        missing = [
            f"{name}{period}"
            for name, values in (
                ("sma", indicator_set.sma),
                ("ema", indicator_set.ema),
                ("rsi", indicator_set.rsi),
            )
            for period, value in values.items()
            if value is None
        ]
        if missing:
            logger.debug(f"Insufficient data for {', '.join(missing)} ({len(closes)} closes)")

        return indicator_set


def compute_indicators(closes: Sequence[float], horizons: HorizonSet) -> IndicatorSet:
    """Shortcut for ``IndicatorCalculator().calculate``."""
    return IndicatorCalculator().calculate(closes, horizons)
