"""Analysis configuration models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.models.indicator import HorizonSet


class AnalysisConfig(BaseModel):
    """Indicator periods and classification thresholds."""

    model_config = ConfigDict(frozen=True)

    # Position trend: price vs SMA(short), SMA(medium), SMA(long)
    trend_sma_periods: tuple[int, int, int] = (7, 25, 99)
    rsi_period: int = Field(default=14, gt=0)

    # Intraday block
    short_sma_periods: tuple[int, int] = (5, 10)
    short_ema_periods: tuple[int, int] = (9, 21)
    short_rsi_period: int = Field(default=7, gt=0)

    # RSI zones (inclusive)
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0

    # Histogram must exceed this fraction of price to count
    macd_noise_ratio: float = Field(default=0.0001, ge=0)

    @model_validator(mode="after")
    def _validate(self):
        periods = self.trend_sma_periods + self.short_sma_periods + self.short_ema_periods
        if any(p <= 0 for p in periods):
            raise ValueError("indicator periods must be positive")
        if not 0 <= self.rsi_oversold < self.rsi_overbought <= 100:
            raise ValueError(
                "rsi thresholds must satisfy 0 <= rsi_oversold < rsi_overbought <= 100"
            )
        return self

    def position_horizons(self) -> HorizonSet:
        return HorizonSet(
            sma_periods=self.trend_sma_periods,
            rsi_periods=(self.rsi_period,),
        )

    def short_term_horizons(self) -> HorizonSet:
        return HorizonSet(
            sma_periods=self.short_sma_periods,
            ema_periods=self.short_ema_periods,
            rsi_periods=(self.short_rsi_period,),
            include_macd=True,
        )


DEFAULT_ANALYSIS_CONFIG = AnalysisConfig()
