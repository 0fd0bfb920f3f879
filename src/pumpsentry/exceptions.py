"""Custom exception classes for PumpSentry."""

from typing import Any, Dict, Optional


class PumpSentryException(Exception):
    """Base exception for PumpSentry application."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.request_id = request_id


class NotFoundError(PumpSentryException):
    """Exception for resource not found errors."""

    def __init__(
        self, resource: str, identifier: str, request_id: Optional[str] = None
    ):
        message = f"{resource} with identifier '{identifier}' not found"
        super().__init__(
            message=message,
            status_code=404,
            details={"resource": resource, "identifier": identifier},
            request_id=request_id,
        )


class PositionAlreadyOpenError(PumpSentryException):
    """Raised when opening a position while another one is still open."""

    def __init__(self, open_symbol: str, request_id: Optional[str] = None):
        super().__init__(
            message=f"A simulated position is already open on {open_symbol}",
            status_code=409,
            details={"open_symbol": open_symbol},
            request_id=request_id,
        )


class NoMarketDataError(PumpSentryException):
    """Raised when a symbol has no snapshot to price a position against."""

    def __init__(self, symbol: str, request_id: Optional[str] = None):
        super().__init__(
            message=f"No market data for {symbol}",
            status_code=422,
            details={"symbol": symbol},
            request_id=request_id,
        )


class ConfigurationError(PumpSentryException):
    """Exception for configuration errors."""

    def __init__(self, setting: str, message: str, request_id: Optional[str] = None):
        super().__init__(
            message=f"Configuration error for '{setting}': {message}",
            status_code=500,
            details={"setting": setting},
            request_id=request_id,
        )
