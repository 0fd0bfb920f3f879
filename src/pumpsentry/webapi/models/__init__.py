"""API request and response models."""

from .requests import OpenPositionRequest
from .responses import (
    BaseResponse,
    CandleData,
    ErrorResponse,
    MessageResponse,
    PnLData,
    PositionData,
    PositionStatus,
    SuccessResponse,
    TickerData,
    TickerDetail,
)

__all__ = [
    "OpenPositionRequest",
    "BaseResponse",
    "CandleData",
    "ErrorResponse",
    "MessageResponse",
    "PnLData",
    "PositionData",
    "PositionStatus",
    "SuccessResponse",
    "TickerData",
    "TickerDetail",
]
