from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


EMPTY_PORTFOLIO_MESSAGE = "Your portfolio is currently empty."


class HoldingValue(BaseModel):
    amount: float = Field(description="Quantity held")
    value: float = Field(description="USD value at the current price, 0 when the price lookup failed")


class PortfolioValuation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_value: float = Field(alias="totalValue", description="Sum of all holding values")
    holdings: Dict[str, HoldingValue] = Field(default_factory=dict, description="Holdings keyed by symbol")
