"""Request models for the PumpSentry API."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...services.position.models import Direction, PumpAnalysis


class OpenPositionRequest(BaseModel):
    """Request to open the simulated position.

    Either ``notional`` is given directly or it is sized from ``equity`` and
    the stored risk preferences. A take-profit target may come explicitly or
    from an analysis result.
    """

    symbol: str = Field(..., min_length=1, description="Exchange symbol, e.g. BTCUSDT")
    direction: Direction = Field(Direction.SHORT, description="LONG or SHORT")
    notional: Optional[float] = Field(None, gt=0, description="Exposure in quote currency")
    equity: Optional[float] = Field(None, gt=0, description="Account equity for sizing")
    take_profit_price: Optional[float] = Field(None, gt=0)
    analysis: Optional[PumpAnalysis] = None

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v):
        """Exchange symbols are upper case."""
        return v.strip().upper()
