from .base import MarketDataProvider, Provider
from .coingecko import COIN_ID_MAP, CoingeckoProvider

__all__ = [
    "Provider",
    "MarketDataProvider",
    "CoingeckoProvider",
    "COIN_ID_MAP",
]
