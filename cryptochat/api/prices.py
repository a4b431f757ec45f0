import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..dependencies import get_market
from ..providers import MarketDataProvider
from ..types import ErrorResponse, PriceResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/price/{symbol}",
    response_model=PriceResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_price(symbol: str, market: MarketDataProvider = Depends(get_market)):
    """Current USD price for a coin symbol, bypassing the model."""
    if not symbol.strip():
        return JSONResponse(status_code=400, content={"error": "Coin symbol is required."})

    try:
        price = await market.get_current_price(symbol)
    except Exception as exc:
        logger.error("Price lookup for %s failed: %s", symbol, exc)
        return JSONResponse(status_code=500, content={"error": "Failed to fetch price"})

    return PriceResponse(symbol=symbol, price=price)
