"""Market snapshot, history and candle endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Query, Request

from ...config.logging import get_logger
from ...exceptions import NotFoundError
from ..dependencies import get_runtime
from ..models.responses import CandleData, SuccessResponse, TickerData, TickerDetail
from ..runtime import MarketRuntime

logger = get_logger(__name__)

router = APIRouter(prefix="/market")


@router.get(
    "/tickers",
    response_model=SuccessResponse[List[TickerData]],
    summary="Top Movers",
    description="Latest published snapshot, biggest gainers first",
)
async def get_top_movers(
    request: Request,
    limit: int = Query(30, ge=1, le=500),
    runtime: MarketRuntime = Depends(get_runtime),
):
    """Return the snapshot published on the last scheduler tick."""
    tickers = runtime.publisher.latest[:limit]
    return SuccessResponse[List[TickerData]](
        data=[TickerData.from_ticker(t) for t in tickers],
        request_id=getattr(request.state, "request_id", None),
    )


@router.get(
    "/tickers/{symbol}",
    response_model=SuccessResponse[TickerDetail],
    summary="Symbol Detail",
    description="Latest scored ticker and recent price history for one symbol",
)
async def get_ticker(
    symbol: str,
    request: Request,
    runtime: MarketRuntime = Depends(get_runtime),
):
    symbol = symbol.upper()
    ticker = runtime.buffer.get(symbol)
    if ticker is None:
        raise NotFoundError("Ticker", symbol)

    detail = TickerDetail(**ticker.to_dict(), history=runtime.buffer.history(symbol))
    return SuccessResponse[TickerDetail](
        data=detail,
        request_id=getattr(request.state, "request_id", None),
    )


@router.get(
    "/candles/{symbol}",
    response_model=SuccessResponse[List[CandleData]],
    summary="Candle History",
    description="OHLCV candles from the exchange REST API",
)
async def get_candles(
    symbol: str,
    request: Request,
    interval: str = Query("1m", pattern=r"^\d+[smhdwM]$"),
    limit: int = Query(100, ge=1, le=1000),
    runtime: MarketRuntime = Depends(get_runtime),
):
    candles = await runtime.candles.get_history(symbol.upper(), interval, limit)
    logger.debug("Candles fetched", symbol=symbol, interval=interval, count=len(candles))
    return SuccessResponse[List[CandleData]](
        data=[
            CandleData(
                time=k.time,
                open=k.open,
                high=k.high,
                low=k.low,
                close=k.close,
                volume=k.volume,
            )
            for k in candles
        ],
        request_id=getattr(request.state, "request_id", None),
    )
