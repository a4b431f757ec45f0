from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ..dependencies import get_market
from ..providers import MarketDataProvider

router = APIRouter()

LIVENESS_TEXT = "Crypto Chat Backend"


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Plain-text liveness check"""
    return LIVENESS_TEXT


@router.get("/healthz")
async def health_check(market: MarketDataProvider = Depends(get_market)) -> Dict[str, Any]:
    """Health check endpoint that verifies market data provider status"""

    provider_status = {market.name: await market.health_check()}

    all_healthy = all(
        status["status"] in ["healthy", "unavailable"]
        for status in provider_status.values()
    )
    available_providers = sum(
        1 for status in provider_status.values()
        if status["status"] == "healthy"
    )

    return {
        "status": "healthy" if all_healthy and available_providers > 0 else "degraded",
        "providers": provider_status,
        "available_providers": available_providers,
        "total_providers": len(provider_status)
    }
