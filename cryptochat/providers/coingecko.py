import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx
from pydantic import ValidationError

from ..config import settings
from ..errors import UnsupportedCoinError, UpstreamError
from ..types import ChartSeries, CoinStats, TrendingCoin
from .base import MarketDataProvider

logger = logging.getLogger(__name__)

# Symbols the chat understands, lower-case, mapped to Coingecko coin ids
COIN_ID_MAP: Mapping[str, str] = {
    "btc": "bitcoin",
    "eth": "ethereum",
    "sol": "solana",
    "doge": "dogecoin",
}

API_KEY_HEADER = "x-cg-demo-api-key"


def first_sentence(text: str) -> str:
    return text.split(". ")[0] + "."


class CoingeckoProvider(MarketDataProvider):
    """Coingecko API provider for coin prices, stats, trending and charts"""

    name = "coingecko"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = settings.coingecko_api_key if api_key is None else api_key
        self.base_url = (base_url or settings.coingecko_base_url).rstrip("/")
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._transport = transport

    def _build_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers[API_KEY_HEADER] = self.api_key
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._build_headers(),
            timeout=self.timeout_s,
            transport=self._transport,
        )

    def resolve_coin_id(self, symbol: str) -> str:
        coin_id = COIN_ID_MAP.get(str(symbol or "").strip().lower())
        if not coin_id:
            raise UnsupportedCoinError(symbol)
        return coin_id

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]], what: str) -> Any:
        logger.info("Fetching %s from %s%s", what, self.base_url, path)
        async with self._client() as client:
            try:
                response = await client.get(path, params=params)
            except httpx.HTTPError as exc:
                logger.error("Error fetching %s: %s", what, exc)
                raise UpstreamError(f"Failed to fetch {what}: {exc}") from exc

        if not response.is_success:
            logger.error("Error fetching %s: status %s", what, response.status_code)
            raise UpstreamError(f"Failed to fetch {what}. Status: {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(f"Failed to fetch {what}: invalid JSON response") from exc

    async def ready(self) -> bool:
        return settings.enable_coingecko

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "Provider disabled"
            }

        try:
            async with self._client() as client:
                response = await client.get("/ping")
                response.raise_for_status()
                return {"status": "healthy", "latency_ms": int(response.elapsed.total_seconds() * 1000)}
        except Exception as e:
            return {"status": "error", "reason": str(e)}

    async def get_current_price(self, symbol: str) -> float:
        """Get the current USD price for a coin symbol (e.g. 'BTC')."""
        coin_id = self.resolve_coin_id(symbol)
        data = await self._get_json(
            "/simple/price",
            {"ids": coin_id, "vs_currencies": "usd"},
            "price data",
        )

        # Payload is nested, e.g. {"bitcoin": {"usd": 65000}}
        entry = data.get(coin_id) if isinstance(data, dict) else None
        price = entry.get("usd") if isinstance(entry, dict) else None
        if price is None:
            raise UpstreamError(f"Price for '{symbol}' not found in API response.")
        try:
            return float(price)
        except (TypeError, ValueError) as exc:
            raise UpstreamError(f"Malformed price for '{symbol}' in API response.") from exc

    async def get_coin_stats(self, symbol: str) -> CoinStats:
        """Get market cap, 24h change and a short description for a coin."""
        coin_id = self.resolve_coin_id(symbol)
        data = await self._get_json(
            f"/coins/{coin_id}",
            {
                "localization": "false",
                "tickers": "false",
                "market_data": "true",
                "community_data": "false",
                "developer_data": "false",
                "sparkline": "false",
            },
            "stats",
        )

        try:
            market_data = data["market_data"]
            return CoinStats(
                symbol=str(data["symbol"]).upper(),
                market_cap=market_data["market_cap"]["usd"],
                price_change_percentage_24h=market_data["price_change_percentage_24h"],
                description=first_sentence(data["description"]["en"]),
            )
        except (KeyError, TypeError, AttributeError, ValidationError) as exc:
            raise UpstreamError(f"Malformed stats response for '{symbol}'.") from exc

    async def list_trending_coins(self) -> List[TrendingCoin]:
        data = await self._get_json("/search/trending", None, "trending data")

        try:
            return [
                TrendingCoin(
                    id=entry["item"]["id"],
                    name=entry["item"]["name"],
                    symbol=entry["item"]["symbol"],
                )
                for entry in data["coins"]
            ]
        except (KeyError, TypeError, ValidationError) as exc:
            raise UpstreamError("Malformed trending response.") from exc

    async def get_7_day_chart_data(self, symbol: str) -> ChartSeries:
        """Daily [timestamp, price] pairs covering the last 7 days."""
        coin_id = self.resolve_coin_id(symbol)
        data = await self._get_json(
            f"/coins/{coin_id}/market_chart",
            {"vs_currency": "usd", "days": "7", "interval": "daily"},
            "chart data",
        )

        prices = data.get("prices") if isinstance(data, dict) else None
        if not isinstance(prices, list):
            raise UpstreamError(f"Chart data for '{symbol}' not found in API response.")
        return prices
