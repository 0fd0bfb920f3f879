"""Health check endpoint for the PumpSentry API."""

import time
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..config.logging import get_logger
from .dependencies import get_runtime
from .runtime import MarketRuntime

logger = get_logger(__name__)
router = APIRouter()

# Track application start time for uptime calculation
_app_start_time = time.time()


@router.get("/health", summary="Health Check")
async def health_check(runtime: MarketRuntime = Depends(get_runtime)) -> Dict[str, Any]:
    """
    Report ingestion health.

    The service is ``degraded`` when the stream is expected to run but is not
    connected or has not delivered any tickers yet.
    """
    stream_expected = runtime.settings.stream_enabled
    symbols = len(runtime.buffer)

    if not stream_expected:
        status = "healthy"
    elif runtime.running and symbols > 0:
        status = "healthy"
    else:
        status = "degraded"

    return {
        "status": status,
        "uptime_seconds": round(time.time() - _app_start_time, 1),
        "stream_running": runtime.running,
        "symbols_tracked": symbols,
        "snapshots_published": runtime.publisher.publish_count,
        "position_open": runtime.tracker.is_open,
    }
