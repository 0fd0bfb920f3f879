"""FastAPI application exposing the ingestion buffer and simulated position."""

import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..config.logging import get_logger
from ..config.settings import get_settings
from .dependencies import verify_auth_token
from .exceptions import setup_exception_handlers
from .health import router as health_router
from .models.responses import MessageResponse
from .routers import market_router, position_router, preferences_router
from .runtime import MarketRuntime

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the stream and snapshot job on startup, stop them on shutdown."""
    runtime: MarketRuntime = app.state.runtime

    if runtime.settings.stream_enabled:
        await runtime.start()
    else:
        logger.info("Ticker stream disabled by configuration")

    logger.info("PumpSentry API started")

    yield

    logger.info("Shutting down PumpSentry API")
    await runtime.stop()


async def add_request_id_middleware(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    logger.info(
        "Request started",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    logger.info(
        "Request completed",
        request_id=request_id,
        status_code=response.status_code,
        method=request.method,
        path=request.url.path,
    )

    return response


def create_app(runtime: Optional[MarketRuntime] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        runtime: Market runtime to serve; built from settings when omitted

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="PumpSentry API",
        description="Real-time pump scoring over the exchange ticker stream "
        "with a simulated 5x position tracker.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.runtime = runtime or MarketRuntime(get_settings())

    app.middleware("http")(add_request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(
        market_router,
        prefix="/api/v1",
        tags=["Market"],
        dependencies=[Depends(verify_auth_token)],
    )
    app.include_router(
        position_router,
        prefix="/api/v1",
        tags=["Position"],
        dependencies=[Depends(verify_auth_token)],
    )
    app.include_router(
        preferences_router,
        prefix="/api/v1",
        tags=["Preferences"],
        dependencies=[Depends(verify_auth_token)],
    )

    @app.get("/", response_model=MessageResponse, summary="API Root Endpoint")
    async def root(token: str = Depends(verify_auth_token)) -> MessageResponse:
        return MessageResponse(message="PumpSentry is running")

    return app
