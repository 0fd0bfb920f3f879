"""Data models for the simulated leveraged position."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

LEVERAGE = 5


class Direction(Enum):
    """Position direction."""

    LONG = "LONG"
    SHORT = "SHORT"


@dataclass(frozen=True)
class SimulatedPosition:
    """The single open simulated position."""

    symbol: str
    entry_price: float
    notional: float  # quote currency, before leverage
    direction: Direction
    opened_at: datetime
    leverage: int = LEVERAGE
    take_profit_price: Optional[float] = None


@dataclass(frozen=True)
class PnLView:
    """Live P&L of the open position against the latest snapshot price."""

    symbol: str
    direction: Direction
    entry_price: float
    current_price: float
    leverage: int
    notional: float
    pnl_percent: float
    pnl_absolute: float
    take_profit_price: Optional[float]
    take_profit_reached: bool


class RecommendedParams(BaseModel):
    """Trade parameters suggested by the analysis collaborator."""

    take_profit_price: float


class PumpAnalysis(BaseModel):
    """Result shape of the external pump analysis collaborator."""

    score: float = Field(..., ge=0, le=1)
    rationale: str
    confidence: float = Field(..., ge=0, le=1)
    risk_estimate: float = Field(..., ge=0, le=1)
    top_features: List[str] = Field(default_factory=list)
    recommended_params: Optional[RecommendedParams] = None
