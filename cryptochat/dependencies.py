"""
Service wiring shared by the HTTP layer.

Everything stateful is built once per application and kept on ``app.state``;
route handlers reach it through the dependency functions below.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from .config import Settings, settings as default_settings
from .core import ChatOrchestrator, LLMChatModel, PortfolioStore, ToolRegistry
from .core.conversation import ChatModel
from .providers import CoingeckoProvider, MarketDataProvider
from .providers.llm import get_llm_provider


@dataclass
class Services:
    market: MarketDataProvider
    portfolio: PortfolioStore
    registry: ToolRegistry
    orchestrator: ChatOrchestrator


def build_services(
    settings: Optional[Settings] = None,
    market: Optional[MarketDataProvider] = None,
    model: Optional[ChatModel] = None,
) -> Services:
    """Assemble the market client, portfolio store, tool registry and orchestrator."""

    settings = settings or default_settings
    market = market or CoingeckoProvider(
        api_key=settings.coingecko_api_key,
        base_url=settings.coingecko_base_url,
        timeout_s=settings.request_timeout_seconds,
    )
    portfolio = PortfolioStore(market)
    registry = ToolRegistry(market, portfolio)

    if model is None:
        provider = get_llm_provider(settings.llm_provider, settings.llm_model)
        model = LLMChatModel(
            provider,
            registry.get_definitions(),
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
        )

    return Services(
        market=market,
        portfolio=portfolio,
        registry=registry,
        orchestrator=ChatOrchestrator(model, registry),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_orchestrator(request: Request) -> ChatOrchestrator:
    return get_services(request).orchestrator


def get_market(request: Request) -> MarketDataProvider:
    return get_services(request).market
