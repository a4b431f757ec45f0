from .market import ChartPoint, ChartSeries, CoinStats, TrendingCoin
from .portfolio import EMPTY_PORTFOLIO_MESSAGE, HoldingValue, PortfolioValuation
from .requests import ChatRequest
from .responses import ChatResponse, ErrorResponse, PriceResponse

__all__ = [
    "ChartPoint",
    "ChartSeries",
    "CoinStats",
    "TrendingCoin",
    "EMPTY_PORTFOLIO_MESSAGE",
    "HoldingValue",
    "PortfolioValuation",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "PriceResponse",
]
