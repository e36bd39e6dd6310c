"""Business logic services."""

from app.services.price_history import PriceHistoryService, plan_request
from app.services.market_analysis import MarketAnalysisService

__all__ = [
    "PriceHistoryService",
    "plan_request",
    "MarketAnalysisService",
]
