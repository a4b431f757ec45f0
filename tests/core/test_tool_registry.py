import pytest

from cryptochat.core import ToolName
from cryptochat.errors import InvalidArgumentError, MissingArgumentError, ToolNotImplementedError


EXPECTED_TOOLS = {
    "get_current_price",
    "get_coin_stats",
    "list_trending_coins",
    "get_7_day_chart_data",
    "add_holding",
    "remove_holding",
    "view_portfolio",
}


def test_registry_covers_exactly_the_tool_set(registry):
    names = {definition.name for definition in registry.get_definitions()}
    assert names == EXPECTED_TOOLS
    assert {member.value for member in ToolName} == EXPECTED_TOOLS


def test_definitions_declare_required_parameters(registry):
    schemas = {d.name: d.to_anthropic_format() for d in registry.get_definitions()}

    add = schemas["add_holding"]["input_schema"]
    assert add["required"] == ["coinSymbol", "amount"]
    assert add["properties"]["amount"]["type"] == "number"
    assert add["properties"]["coinSymbol"]["type"] == "string"
    assert schemas["view_portfolio"]["input_schema"]["required"] == []
    assert schemas["get_current_price"]["input_schema"]["required"] == ["coinSymbol"]


def test_unknown_tool_is_not_implemented(registry):
    with pytest.raises(ToolNotImplementedError) as excinfo:
        registry.resolve("buy_lambo")

    assert excinfo.value.message == "Function 'buy_lambo' is not implemented."


def test_only_chart_returns_directly(registry):
    direct = [name for name in ToolName if registry.resolve(name.value).returns_directly]
    assert direct == [ToolName.GET_7_DAY_CHART_DATA]


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["get_current_price", "get_coin_stats", "get_7_day_chart_data"])
async def test_symbol_tools_require_coin_symbol(registry, market, name):
    tool = registry.resolve(name)

    with pytest.raises(MissingArgumentError) as excinfo:
        await tool.invoke({}, "s1")

    assert excinfo.value.message == f"Missing required 'coinSymbol' argument for function '{name}'"
    assert market.calls == []


@pytest.mark.asyncio
async def test_portfolio_tools_receive_session(registry, store):
    add = registry.resolve("add_holding")
    await add.invoke({"coinSymbol": "eth", "amount": 2}, "session-a")

    assert store.get_holdings("session-a") == {"ETH": 2}
    assert store.get_holdings("session-b") == {}

    view = await registry.resolve("view_portfolio").invoke({}, "session-a")
    assert view["totalValue"] == 6000.0


@pytest.mark.asyncio
async def test_add_holding_requires_amount(registry, store):
    with pytest.raises(MissingArgumentError):
        await registry.resolve("add_holding").invoke({"coinSymbol": "BTC"}, "s1")
    assert store.get_holdings("s1") == {}


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["get_current_price", "add_holding", "remove_holding"])
async def test_non_string_symbol_is_invalid_argument(registry, market, store, name):
    with pytest.raises(InvalidArgumentError) as excinfo:
        await registry.resolve(name).invoke({"coinSymbol": 42, "amount": 1}, "s1")

    assert excinfo.value.message == f"Invalid 'coinSymbol' argument for function '{name}': expected string"
    assert market.calls == []
    assert store.get_holdings("s1") == {}


@pytest.mark.asyncio
async def test_market_tools_return_plain_data(registry):
    price = await registry.resolve("get_current_price").invoke({"coinSymbol": "btc"}, "s1")
    stats = await registry.resolve("get_coin_stats").invoke({"coinSymbol": "btc"}, "s1")
    trending = await registry.resolve("list_trending_coins").invoke({}, "s1")

    assert price == 50000.0
    assert stats["symbol"] == "BTC"
    assert trending == [{"id": "pepe", "name": "Pepe", "symbol": "PEPE"}]
