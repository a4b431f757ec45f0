from typing import Any, Dict, List, Optional

import pytest
import structlog

from cryptochat.core import ChatModel, Conversation, ModelTurn, PortfolioStore, ToolRegistry
from cryptochat.errors import UnsupportedCoinError, UpstreamError
from cryptochat.providers import COIN_ID_MAP, MarketDataProvider
from cryptochat.providers.llm import ToolCall
from cryptochat.types import CoinStats, TrendingCoin

CHART = [[1700000000000, 35000.0], [1700086400000, 36000.5]]


class FakeMarket(MarketDataProvider):
    """In-memory market data with per-symbol failure injection."""

    name = "fake"

    def __init__(self, prices: Optional[Dict[str, float]] = None, failing: Optional[set] = None):
        self.prices = prices if prices is not None else {"BTC": 50000.0, "ETH": 3000.0}
        self.failing = failing or set()
        self.calls: List[tuple] = []

    async def ready(self) -> bool:
        return True

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy"}

    def resolve_coin_id(self, symbol: str) -> str:
        coin_id = COIN_ID_MAP.get(symbol.lower())
        if not coin_id:
            raise UnsupportedCoinError(symbol)
        return coin_id

    async def get_current_price(self, symbol: str) -> float:
        self.calls.append(("price", symbol))
        self.resolve_coin_id(symbol)
        if symbol.upper() in self.failing:
            raise UpstreamError("Failed to fetch price data. Status: 503")
        return self.prices[symbol.upper()]

    async def get_coin_stats(self, symbol: str) -> CoinStats:
        self.calls.append(("stats", symbol))
        self.resolve_coin_id(symbol)
        return CoinStats(
            symbol=symbol.upper(),
            market_cap=1.0e12,
            price_change_percentage_24h=1.5,
            description="Bitcoin is the first decentralized cryptocurrency.",
        )

    async def list_trending_coins(self) -> List[TrendingCoin]:
        self.calls.append(("trending",))
        return [TrendingCoin(id="pepe", name="Pepe", symbol="PEPE")]

    async def get_7_day_chart_data(self, symbol: str):
        self.calls.append(("chart", symbol))
        self.resolve_coin_id(symbol)
        return CHART


class ScriptedConversation(Conversation):
    def __init__(self, model: "ScriptedModel"):
        self.model = model

    async def send_turn(self, text: str) -> ModelTurn:
        self.model.turns.append(text)
        self.model.log_contexts.append(structlog.contextvars.get_contextvars())
        if self.model.fail_with is not None:
            raise self.model.fail_with
        if self.model.tool_call is None:
            return ModelTurn(text=self.model.reply)
        name, arguments = self.model.tool_call
        return ModelTurn(tool_call=ToolCall(id="call_1", name=name, arguments=arguments))

    async def send_tool_result(self, name: str, result: Any) -> str:
        self.model.tool_results.append((name, result))
        return self.model.final_reply


class ScriptedModel(ChatModel):
    """Chat model double: answers directly or requests one fixed tool call."""

    def __init__(self, reply: str = "Hello!", tool_call: Optional[tuple] = None, final_reply: str = "Done."):
        self.reply = reply
        self.tool_call = tool_call
        self.final_reply = final_reply
        self.fail_with: Optional[Exception] = None
        self.turns: List[str] = []
        self.tool_results: List[tuple] = []
        self.log_contexts: List[Dict[str, Any]] = []

    def start_conversation(self) -> Conversation:
        return ScriptedConversation(self)


@pytest.fixture
def market() -> FakeMarket:
    return FakeMarket()


@pytest.fixture
def store(market) -> PortfolioStore:
    return PortfolioStore(market)


@pytest.fixture
def registry(market, store) -> ToolRegistry:
    return ToolRegistry(market, store)


@pytest.fixture
def make_market():
    return FakeMarket


@pytest.fixture
def make_model():
    return ScriptedModel
