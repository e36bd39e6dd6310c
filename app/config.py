"""Application configuration."""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Binance spot API
    binance_base_url: str = "https://api.binance.com"
    binance_api_key: str = ""
    # Quote assets: price lookups vs. kline history
    price_quote_asset: str = "USDT"
    quote_asset: str = "USDC"
    requests_per_minute: int = 1200

    # Fear & Greed index
    fear_greed_url: str = "https://api.alternative.me/fng/"

    http_timeout: float = 30.0

    # Analysis defaults
    default_timeframe: str = "daily"
    default_days: int = 30

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
