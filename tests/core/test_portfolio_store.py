import pytest

from cryptochat.core import PortfolioStore
from cryptochat.errors import InvalidAmountError
from cryptochat.types import EMPTY_PORTFOLIO_MESSAGE


@pytest.mark.asyncio
async def test_add_creates_and_accumulates(store):
    first = await store.add_holding("s1", "btc", 1.5)
    second = await store.add_holding("s1", "BTC", 2)

    assert first == "Successfully added 1.5 BTC. You now hold 1.5 BTC."
    assert second == "Successfully added 2 BTC. You now hold 3.5 BTC."
    assert store.get_holdings("s1") == {"BTC": 3.5}


@pytest.mark.asyncio
async def test_add_then_remove_same_amount_drops_entry(store):
    await store.add_holding("s1", "BTC", 5)
    message = await store.remove_holding("s1", "btc", 5)

    assert message == "Successfully removed 5 BTC."
    assert "BTC" not in store.get_holdings("s1")


@pytest.mark.asyncio
async def test_partial_remove_keeps_remainder(store):
    await store.add_holding("s1", "ETH", 4)
    await store.remove_holding("s1", "ETH", 1.5)

    assert store.get_holdings("s1") == {"ETH": 2.5}


@pytest.mark.asyncio
async def test_insufficient_balance_is_a_message_not_an_error(store):
    await store.add_holding("s1", "ETH", 2)

    message = await store.remove_holding("s1", "ETH", 10)

    assert message == "Error: You don't have enough ETH to remove. You only hold 2."
    assert store.get_holdings("s1") == {"ETH": 2}


@pytest.mark.asyncio
async def test_remove_from_empty_portfolio(store):
    message = await store.remove_holding("fresh", "eth", 10)

    assert message == "Error: You don't have enough ETH to remove. You only hold 0."
    assert store.get_holdings("fresh") == {}


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -1, float("nan"), float("inf"), "abc", None, True])
async def test_invalid_amounts_are_rejected(store, amount):
    await store.add_holding("s1", "BTC", 1)

    with pytest.raises(InvalidAmountError):
        await store.add_holding("s1", "BTC", amount)
    with pytest.raises(InvalidAmountError):
        await store.remove_holding("s1", "BTC", amount)

    assert store.get_holdings("s1") == {"BTC": 1}


@pytest.mark.asyncio
async def test_numeric_string_amount_is_accepted(store):
    await store.add_holding("s1", "SOL", "2.5")
    assert store.get_holdings("s1") == {"SOL": 2.5}


@pytest.mark.asyncio
async def test_view_empty_portfolio(store):
    assert await store.view_portfolio("nobody") == {"message": EMPTY_PORTFOLIO_MESSAGE}
    assert EMPTY_PORTFOLIO_MESSAGE == "Your portfolio is currently empty."


@pytest.mark.asyncio
async def test_view_values_holdings(store):
    await store.add_holding("s1", "BTC", 2)
    await store.add_holding("s1", "ETH", 10)

    view = await store.view_portfolio("s1")

    assert view == {
        "totalValue": 130000.0,
        "holdings": {
            "BTC": {"amount": 2.0, "value": 100000.0},
            "ETH": {"amount": 10.0, "value": 30000.0},
        },
    }


@pytest.mark.asyncio
async def test_view_tolerates_single_price_failure(make_market):
    market = make_market(failing={"ETH"})
    store = PortfolioStore(market)
    await store.add_holding("s1", "BTC", 1)
    await store.add_holding("s1", "ETH", 3)
    await store.add_holding("s1", "XRP", 7)  # not in the lookup table

    view = await store.view_portfolio("s1")

    assert view["holdings"]["BTC"] == {"amount": 1.0, "value": 50000.0}
    assert view["holdings"]["ETH"] == {"amount": 3.0, "value": 0.0}
    assert view["holdings"]["XRP"] == {"amount": 7.0, "value": 0.0}
    assert view["totalValue"] == 50000.0


@pytest.mark.asyncio
async def test_sessions_are_isolated(store):
    await store.add_holding("alice", "BTC", 1)
    await store.add_holding("bob", "ETH", 2)

    assert store.get_holdings("alice") == {"BTC": 1}
    assert store.get_holdings("bob") == {"ETH": 2}

    store.clear()
    assert store.get_holdings("alice") == {}


@pytest.mark.asyncio
async def test_symbol_is_normalised_to_text(store):
    message = await store.add_holding("s1", 42, 1)

    assert message == "Successfully added 1 42. You now hold 1 42."
    assert store.get_holdings("s1") == {"42": 1}
