"""Indicator request and result models."""

from pydantic import BaseModel, ConfigDict, Field


class HorizonSet(BaseModel):
    """Which indicator periods to compute for one pass over a series."""

    model_config = ConfigDict(frozen=True)

    sma_periods: tuple[int, ...] = ()
    ema_periods: tuple[int, ...] = ()
    rsi_periods: tuple[int, ...] = ()
    include_macd: bool = False


class MacdValues(BaseModel):
    """MACD main line, signal line and histogram.

    All three are None together when the series is too short.
    """

    model_config = ConfigDict(frozen=True)

    macd: float | None = None
    signal: float | None = None
    histogram: float | None = None

    @property
    def is_complete(self) -> bool:
        return None not in (self.macd, self.signal, self.histogram)


class IndicatorSet(BaseModel):
    """Indicator values keyed by period.

    A None value means "insufficient data". It is never replaced by zero,
    since zero is a meaningful value for MACD lines.
    """

    model_config = ConfigDict(frozen=True)

    sma: dict[int, float | None] = Field(default_factory=dict)
    ema: dict[int, float | None] = Field(default_factory=dict)
    rsi: dict[int, float | None] = Field(default_factory=dict)
    macd: MacdValues | None = None

    def merged(self, other: "IndicatorSet") -> "IndicatorSet":
        """Combine two sets; values from ``other`` win on overlapping periods."""
        return IndicatorSet(
            sma={**self.sma, **other.sma},
            ema={**self.ema, **other.ema},
            rsi={**self.rsi, **other.rsi},
            macd=other.macd if other.macd is not None else self.macd,
        )
