"""
In-memory portfolio store.

Holdings live for the lifetime of the process, keyed by session id. The store is
shared across requests without locking: add/remove never await, so each single
mutation runs uninterrupted on the event loop, but valuation awaits price
lookups and can observe concurrent changes to the same session.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

from ..errors import InvalidAmountError
from ..providers.base import MarketDataProvider
from ..types import EMPTY_PORTFOLIO_MESSAGE, HoldingValue, PortfolioValuation

logger = logging.getLogger(__name__)


def coerce_amount(amount: Any) -> float:
    """Accept finite positive numbers (or numeric strings) and reject the rest."""
    if isinstance(amount, bool):
        raise InvalidAmountError(amount)
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise InvalidAmountError(amount)
    if not math.isfinite(value) or value <= 0:
        raise InvalidAmountError(amount)
    return value


def format_amount(value: float) -> str:
    return f"{value:g}" if value == int(value) else repr(value)


class PortfolioStore:
    """Per-session ledger of simulated holdings."""

    def __init__(self, market: MarketDataProvider, logger: Optional[logging.Logger] = None):
        self.market = market
        self.logger = logger or logging.getLogger(__name__)
        self._portfolios: Dict[str, Dict[str, float]] = {}

    def _portfolio_for(self, session_id: str) -> Dict[str, float]:
        return self._portfolios.setdefault(session_id, {})

    def get_holdings(self, session_id: str) -> Dict[str, float]:
        """Snapshot of a session's holdings; empty for unknown sessions."""
        return dict(self._portfolios.get(session_id, {}))

    def clear(self) -> None:
        self._portfolios.clear()

    async def add_holding(self, session_id: str, coin_symbol: str, amount: Any) -> str:
        value = coerce_amount(amount)
        portfolio = self._portfolio_for(session_id)
        symbol = str(coin_symbol).strip().upper()

        portfolio[symbol] = portfolio.get(symbol, 0) + value
        self.logger.info("Added %s %s to session %s", value, symbol, session_id)
        return (
            f"Successfully added {format_amount(value)} {symbol}. "
            f"You now hold {format_amount(portfolio[symbol])} {symbol}."
        )

    async def remove_holding(self, session_id: str, coin_symbol: str, amount: Any) -> str:
        """Remove part of a holding.

        Removing more than is held is a normal outcome, answered with a message
        rather than an exception, and leaves the portfolio untouched.
        """
        value = coerce_amount(amount)
        portfolio = self._portfolio_for(session_id)
        symbol = str(coin_symbol).strip().upper()

        held = portfolio.get(symbol, 0)
        if held < value:
            return (
                f"Error: You don't have enough {symbol} to remove. "
                f"You only hold {format_amount(held)}."
            )

        remaining = held - value
        if remaining == 0:
            del portfolio[symbol]
        else:
            portfolio[symbol] = remaining
        self.logger.info("Removed %s %s from session %s", value, symbol, session_id)
        return f"Successfully removed {format_amount(value)} {symbol}."

    async def view_portfolio(self, session_id: str) -> Dict[str, Any]:
        portfolio = self._portfolio_for(session_id)
        if not portfolio:
            return {"message": EMPTY_PORTFOLIO_MESSAGE}

        total_value = 0.0
        holdings: Dict[str, HoldingValue] = {}

        # One failed price must not sink the whole report
        for symbol, amount in list(portfolio.items()):
            try:
                price = await self.market.get_current_price(symbol)
            except Exception as exc:
                self.logger.error("Could not fetch price for %s: %s", symbol, exc)
                holdings[symbol] = HoldingValue(amount=amount, value=0)
                continue
            value = amount * price
            holdings[symbol] = HoldingValue(amount=amount, value=value)
            total_value += value

        valuation = PortfolioValuation(total_value=total_value, holdings=holdings)
        return valuation.model_dump(by_alias=True)
