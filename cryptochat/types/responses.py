from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["text", "chart"] = Field(description="text for a model reply, chart for raw series data")
    content: Any = Field(description="Reply text or chart series")
    session_id: str = Field(alias="sessionId", description="Session the request was served under")


class PriceResponse(BaseModel):
    symbol: str = Field(description="Symbol as requested")
    price: float = Field(description="Current price in USD")


class ErrorResponse(BaseModel):
    error: str = Field(description="Error message")
