"""Exception handling for the PumpSentry API."""

from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..config.logging import get_logger
from ..exceptions import PumpSentryException
from .models.responses import ErrorResponse

logger = get_logger(__name__)


class ValidationException(PumpSentryException):
    """Exception for request validation errors raised by handlers."""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, str]] = None,
        request_id: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            status_code=422,
            details={"field_errors": field_errors or {}},
            request_id=request_id,
        )


def _error_response(
    request: Request,
    error_type: str,
    message: str,
    status_code: int,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Render the standard error envelope."""
    error: Dict[str, Any] = {
        "type": error_type,
        "message": message,
        "status_code": status_code,
    }
    if details is not None:
        error["details"] = details

    body = ErrorResponse(
        success=False,
        error=error,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


async def pumpsentry_exception_handler(
    request: Request, exc: PumpSentryException
) -> JSONResponse:
    """Handle domain exceptions (unknown symbol, occupied slot, ...)."""
    logger.warning(
        "Request rejected",
        exception_type=type(exc).__name__,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
    )
    return _error_response(
        request, type(exc).__name__, exc.message, exc.status_code, exc.details
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request body and parameter validation errors."""
    field_errors = {
        ".".join(str(loc) for loc in error["loc"]): error["msg"]
        for error in exc.errors()
    }

    logger.warning(
        "Validation error occurred",
        field_errors=field_errors,
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
    )
    return _error_response(
        request,
        "ValidationError",
        "Request validation failed",
        422,
        {"field_errors": field_errors},
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTP exceptions, including failed authentication."""
    logger.warning(
        "HTTP exception occurred",
        status_code=exc.status_code,
        detail=exc.detail,
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
    )
    return _error_response(
        request,
        "HTTPException",
        str(exc.detail),
        exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "Unexpected exception occurred",
        exception_type=type(exc).__name__,
        message=str(exc),
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        exc_info=True,
    )
    return _error_response(
        request, "InternalServerError", "An unexpected error occurred", 500
    )


def setup_exception_handlers(app):
    """Register exception handlers with FastAPI app."""
    app.add_exception_handler(PumpSentryException, pumpsentry_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
