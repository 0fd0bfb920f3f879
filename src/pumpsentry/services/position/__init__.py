"""Simulated leveraged position tracking."""

from .models import (
    LEVERAGE,
    Direction,
    PnLView,
    PumpAnalysis,
    RecommendedParams,
    SimulatedPosition,
)
from .tracker import (
    PositionTracker,
    calculate_pnl_percent,
    default_take_profit,
    size_notional,
    take_profit_from_analysis,
)

__all__ = [
    "LEVERAGE",
    "Direction",
    "PnLView",
    "PumpAnalysis",
    "RecommendedParams",
    "SimulatedPosition",
    "PositionTracker",
    "calculate_pnl_percent",
    "default_take_profit",
    "size_notional",
    "take_profit_from_analysis",
]
