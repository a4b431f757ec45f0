from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..types import ChartSeries, CoinStats, TrendingCoin


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: int = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class MarketDataProvider(Provider):
    """Provider for coin prices, statistics and price history.

    Symbols are resolved through a closed lookup table; implementations raise
    ``UnsupportedCoinError`` before any network call for unknown symbols and
    ``UpstreamError`` for every provider-side failure.
    """

    @abstractmethod
    def resolve_coin_id(self, symbol: str) -> str:
        """Map a trading symbol (any case) to the provider identifier"""
        pass

    @abstractmethod
    async def get_current_price(self, symbol: str) -> float:
        """Current USD price"""
        pass

    @abstractmethod
    async def get_coin_stats(self, symbol: str) -> CoinStats:
        """Market cap, 24h change and a one sentence description"""
        pass

    @abstractmethod
    async def list_trending_coins(self) -> List[TrendingCoin]:
        """Trending coins in provider order"""
        pass

    @abstractmethod
    async def get_7_day_chart_data(self, symbol: str) -> ChartSeries:
        """Daily [timestamp, price] pairs for the last seven days"""
        pass
