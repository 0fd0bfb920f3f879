"""API routers."""

from .market import router as market_router
from .position import router as position_router
from .preferences import router as preferences_router

__all__ = ["market_router", "position_router", "preferences_router"]
