"""
Tool registry for LLM-driven tool calling.

The set of tools is closed: ``ToolName`` enumerates every function the model
may call and the registry refuses to build unless each member has a handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Coroutine, Dict, List, Mapping

from ..errors import InvalidArgumentError, MissingArgumentError, ToolNotImplementedError
from ..providers.base import MarketDataProvider
from ..providers.llm.base import ToolDefinition, ToolParameter, ToolParameterType
from .portfolio import PortfolioStore


class ToolName(str, Enum):
    GET_CURRENT_PRICE = "get_current_price"
    GET_COIN_STATS = "get_coin_stats"
    LIST_TRENDING_COINS = "list_trending_coins"
    GET_7_DAY_CHART_DATA = "get_7_day_chart_data"
    ADD_HOLDING = "add_holding"
    REMOVE_HOLDING = "remove_holding"
    VIEW_PORTFOLIO = "view_portfolio"


# Results of these tools go straight to the caller instead of back to the model
DIRECT_RESULT_TOOLS = frozenset({ToolName.GET_7_DAY_CHART_DATA})

ToolHandler = Callable[[Dict[str, Any], str], Coroutine[Any, Any, Any]]


@dataclass(frozen=True)
class RegisteredTool:
    """A tool registered in the registry with its definition and handler."""
    name: ToolName
    definition: ToolDefinition
    handler: ToolHandler

    @property
    def returns_directly(self) -> bool:
        return self.name in DIRECT_RESULT_TOOLS

    def validate_arguments(self, arguments: Dict[str, Any]) -> None:
        for param in self.definition.required_parameters:
            value = arguments.get(param)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MissingArgumentError(param, self.name.value)
        for param in self.definition.parameters:
            value = arguments.get(param.name)
            if param.type == ToolParameterType.STRING and value is not None and not isinstance(value, str):
                raise InvalidArgumentError(param.name, self.name.value, "string")

    async def invoke(self, arguments: Dict[str, Any], session_id: str) -> Any:
        self.validate_arguments(arguments)
        return await self.handler(arguments, session_id)


def _coin_symbol_param(example: str = "e.g., 'BTC' for Bitcoin or 'ETH' for Ethereum") -> ToolParameter:
    return ToolParameter(
        name="coinSymbol",
        type=ToolParameterType.STRING,
        description=f"The symbol of the coin, {example}.",
    )


def _amount_param(verb: str) -> ToolParameter:
    return ToolParameter(
        name="amount",
        type=ToolParameterType.NUMBER,
        description=f"The amount of the cryptocurrency to {verb}.",
    )


TOOL_DEFINITIONS: Mapping[ToolName, ToolDefinition] = MappingProxyType({
    ToolName.GET_CURRENT_PRICE: ToolDefinition(
        name=ToolName.GET_CURRENT_PRICE.value,
        description="Get the current price of a specific cryptocurrency in USD.",
        parameters=[_coin_symbol_param()],
    ),
    ToolName.LIST_TRENDING_COINS: ToolDefinition(
        name=ToolName.LIST_TRENDING_COINS.value,
        description="Generate a list of the top trending coins on CoinGecko right now.",
    ),
    ToolName.GET_COIN_STATS: ToolDefinition(
        name=ToolName.GET_COIN_STATS.value,
        description=(
            "Get basic statistics for a specific cryptocurrency, including its market cap, "
            "24-hour price change, and a brief description."
        ),
        parameters=[_coin_symbol_param()],
    ),
    ToolName.GET_7_DAY_CHART_DATA: ToolDefinition(
        name=ToolName.GET_7_DAY_CHART_DATA.value,
        description=(
            "Get historical price data for a cryptocurrency over the last 7 days. "
            "Use this when a user asks for a chart, graph, or price history."
        ),
        parameters=[_coin_symbol_param("e.g., 'BTC' for Bitcoin")],
    ),
    ToolName.ADD_HOLDING: ToolDefinition(
        name=ToolName.ADD_HOLDING.value,
        description="Add a cryptocurrency to your portfolio.",
        parameters=[_coin_symbol_param("e.g., 'BTC' for Bitcoin"), _amount_param("add")],
    ),
    ToolName.REMOVE_HOLDING: ToolDefinition(
        name=ToolName.REMOVE_HOLDING.value,
        description="Remove a cryptocurrency from your portfolio.",
        parameters=[_coin_symbol_param("e.g., 'BTC' for Bitcoin"), _amount_param("remove")],
    ),
    ToolName.VIEW_PORTFOLIO: ToolDefinition(
        name=ToolName.VIEW_PORTFOLIO.value,
        description="View your current cryptocurrency portfolio with current values.",
    ),
})


class ToolRegistry:
    """
    Immutable mapping of tool names to handlers backed by the market data
    provider and the portfolio store.
    """

    def __init__(
        self,
        market: MarketDataProvider,
        portfolio: PortfolioStore,
    ):
        self.market = market
        self.portfolio = portfolio

        handlers: Dict[ToolName, ToolHandler] = {
            ToolName.GET_CURRENT_PRICE: self._handle_get_current_price,
            ToolName.GET_COIN_STATS: self._handle_get_coin_stats,
            ToolName.LIST_TRENDING_COINS: self._handle_list_trending_coins,
            ToolName.GET_7_DAY_CHART_DATA: self._handle_get_7_day_chart_data,
            ToolName.ADD_HOLDING: self._handle_add_holding,
            ToolName.REMOVE_HOLDING: self._handle_remove_holding,
            ToolName.VIEW_PORTFOLIO: self._handle_view_portfolio,
        }
        missing = [name.value for name in ToolName if name not in handlers]
        if missing:
            raise RuntimeError(f"Tools without a handler: {', '.join(missing)}")

        self._tools: Mapping[ToolName, RegisteredTool] = MappingProxyType({
            name: RegisteredTool(name=name, definition=TOOL_DEFINITIONS[name], handler=handlers[name])
            for name in ToolName
        })

    def get_definitions(self) -> List[ToolDefinition]:
        """Get all tool definitions for passing to the LLM."""
        return [tool.definition for tool in self._tools.values()]

    def resolve(self, name: str) -> RegisteredTool:
        """Look up a tool by the name the model used."""
        try:
            return self._tools[ToolName(name)]
        except ValueError:
            raise ToolNotImplementedError(name)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _handle_get_current_price(self, arguments: Dict[str, Any], session_id: str) -> float:
        return await self.market.get_current_price(arguments["coinSymbol"])

    async def _handle_get_coin_stats(self, arguments: Dict[str, Any], session_id: str) -> Dict[str, Any]:
        stats = await self.market.get_coin_stats(arguments["coinSymbol"])
        return stats.model_dump()

    async def _handle_list_trending_coins(self, arguments: Dict[str, Any], session_id: str) -> List[Dict[str, Any]]:
        coins = await self.market.list_trending_coins()
        return [coin.model_dump() for coin in coins]

    async def _handle_get_7_day_chart_data(self, arguments: Dict[str, Any], session_id: str) -> List[Any]:
        return await self.market.get_7_day_chart_data(arguments["coinSymbol"])

    async def _handle_add_holding(self, arguments: Dict[str, Any], session_id: str) -> str:
        return await self.portfolio.add_holding(session_id, arguments["coinSymbol"], arguments["amount"])

    async def _handle_remove_holding(self, arguments: Dict[str, Any], session_id: str) -> str:
        return await self.portfolio.remove_holding(session_id, arguments["coinSymbol"], arguments["amount"])

    async def _handle_view_portfolio(self, arguments: Dict[str, Any], session_id: str) -> Dict[str, Any]:
        return await self.portfolio.view_portfolio(session_id)
