from typing import List, Tuple

from pydantic import BaseModel, Field


ChartPoint = Tuple[float, float]
ChartSeries = List[ChartPoint]


class CoinStats(BaseModel):
    symbol: str = Field(description="Upper-case trading symbol")
    market_cap: float = Field(description="Market capitalisation in USD")
    price_change_percentage_24h: float = Field(description="24 hour price change in percent")
    description: str = Field(description="First sentence of the provider description")


class TrendingCoin(BaseModel):
    id: str = Field(description="Provider identifier")
    name: str = Field(description="Display name")
    symbol: str = Field(description="Trading symbol as returned by the provider")
