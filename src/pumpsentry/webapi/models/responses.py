"""Response models for the PumpSentry API."""

from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ...market.models import ScoredTicker
from ...services.position.models import PnLView, SimulatedPosition

# Generic type for data responses
T = TypeVar("T")


class BaseResponse(BaseModel):
    """Base response model for all API responses."""

    success: bool = Field(..., description="Whether the request was successful")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Response timestamp",
    )
    request_id: Optional[str] = Field(
        None, description="Unique request identifier for tracking"
    )

    model_config = ConfigDict(use_enum_values=True)

    @field_serializer("timestamp")
    def serialize_timestamp(self, dt: datetime) -> str:
        """Serialize datetime to ISO format."""
        return dt.isoformat()


class SuccessResponse(BaseResponse, Generic[T]):
    """Generic success response with typed data."""

    success: bool = Field(True, description="Always true for success responses")
    data: T = Field(..., description="Response data")
    message: Optional[str] = Field(None, description="Optional success message")


class ErrorResponse(BaseResponse):
    """Error response model."""

    success: bool = Field(False, description="Always false for error responses")
    error: Dict[str, Any] = Field(..., description="Error details")


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class TickerData(BaseModel):
    """Scored ticker as exposed over the API."""

    symbol: str
    last_price: float
    price_change_percent: float
    high: float
    low: float
    volume: float
    volatility_score: float
    buy_pressure: float

    @classmethod
    def from_ticker(cls, ticker: ScoredTicker) -> "TickerData":
        return cls(**ticker.to_dict())


class TickerDetail(TickerData):
    """Scored ticker plus its recent price history."""

    history: List[float] = Field(default_factory=list)


class CandleData(BaseModel):
    """OHLCV candle."""

    time: float
    open: float
    high: float
    low: float
    close: float
    volume: float


class PositionData(BaseModel):
    """Open simulated position."""

    symbol: str
    direction: str
    entry_price: float
    notional: float
    leverage: int
    opened_at: datetime
    take_profit_price: Optional[float] = None

    @classmethod
    def from_position(cls, position: SimulatedPosition) -> "PositionData":
        return cls(
            symbol=position.symbol,
            direction=position.direction.value,
            entry_price=position.entry_price,
            notional=position.notional,
            leverage=position.leverage,
            opened_at=position.opened_at,
            take_profit_price=position.take_profit_price,
        )


class PnLData(BaseModel):
    """Live P&L of the open position."""

    symbol: str
    direction: str
    entry_price: float
    current_price: float
    leverage: int
    notional: float
    pnl_percent: float
    pnl_absolute: float
    take_profit_price: Optional[float] = None
    take_profit_reached: bool = False

    @classmethod
    def from_view(cls, view: PnLView) -> "PnLData":
        return cls(
            symbol=view.symbol,
            direction=view.direction.value,
            entry_price=view.entry_price,
            current_price=view.current_price,
            leverage=view.leverage,
            notional=view.notional,
            pnl_percent=view.pnl_percent,
            pnl_absolute=view.pnl_absolute,
            take_profit_price=view.take_profit_price,
            take_profit_reached=view.take_profit_reached,
        )


class PositionStatus(BaseModel):
    """Position slot state: open position with P&L, or closed."""

    open: bool
    position: Optional[PositionData] = None
    pnl: Optional[PnLData] = None
    pnl_available: bool = False
