"""Simulated position endpoints."""

from fastapi import APIRouter, Depends, Request

from ...config.logging import get_logger
from ...services.position.tracker import size_notional, take_profit_from_analysis
from ..dependencies import get_runtime
from ..exceptions import ValidationException
from ..models.requests import OpenPositionRequest
from ..models.responses import PnLData, PositionData, PositionStatus, SuccessResponse
from ..runtime import MarketRuntime

logger = get_logger(__name__)

router = APIRouter(prefix="/position")


def _status(runtime: MarketRuntime) -> PositionStatus:
    position = runtime.tracker.position
    if position is None:
        return PositionStatus(open=False)

    view = runtime.tracker.evaluate()
    return PositionStatus(
        open=True,
        position=PositionData.from_position(position),
        pnl=PnLData.from_view(view) if view is not None else None,
        pnl_available=view is not None,
    )


@router.get(
    "",
    response_model=SuccessResponse[PositionStatus],
    summary="Position Status",
    description="Open simulated position with live P&L",
)
async def get_position(request: Request, runtime: MarketRuntime = Depends(get_runtime)):
    return SuccessResponse[PositionStatus](
        data=_status(runtime),
        request_id=getattr(request.state, "request_id", None),
    )


@router.post(
    "",
    response_model=SuccessResponse[PositionStatus],
    status_code=201,
    summary="Open Position",
    description="Open the simulated 5x position at the current snapshot price",
)
async def open_position(
    body: OpenPositionRequest,
    request: Request,
    runtime: MarketRuntime = Depends(get_runtime),
):
    request_id = getattr(request.state, "request_id", None)

    notional = body.notional
    if notional is None:
        if body.equity is None:
            raise ValidationException(
                "Either notional or equity is required",
                field_errors={"notional": "missing", "equity": "missing"},
                request_id=request_id,
            )
        prefs = runtime.preferences
        notional = size_notional(body.equity, prefs.risk_percent, prefs.max_notional)

    take_profit = body.take_profit_price or take_profit_from_analysis(body.analysis)

    runtime.tracker.open(body.symbol, body.direction, notional, take_profit)

    return SuccessResponse[PositionStatus](
        data=_status(runtime),
        message=f"Opened {body.direction.value} on {body.symbol}",
        request_id=request_id,
    )


@router.delete(
    "",
    response_model=SuccessResponse[PositionStatus],
    summary="Close Position",
    description="Discard the simulated position",
)
async def close_position(request: Request, runtime: MarketRuntime = Depends(get_runtime)):
    runtime.tracker.close()
    return SuccessResponse[PositionStatus](
        data=PositionStatus(open=False),
        message="Position closed",
        request_id=getattr(request.state, "request_id", None),
    )
