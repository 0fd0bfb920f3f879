"""Shared FastAPI dependencies."""

from fastapi import HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config.logging import get_logger
from ..config.settings import get_settings
from .runtime import MarketRuntime

logger = get_logger(__name__)

# Security scheme for Bearer token authentication
security = HTTPBearer()


def verify_auth_token(
    credentials: HTTPAuthorizationCredentials = Security(security),
) -> str:
    """
    Verify the authentication token.

    Args:
        credentials: The HTTP authorization credentials

    Returns:
        The token if valid

    Raises:
        HTTPException: If token is invalid or not configured
    """
    expected_token = get_settings().endpoint_auth_token
    if not expected_token:
        logger.error("Endpoint auth token not configured")
        raise HTTPException(detail="ENDPOINT_AUTH_TOKEN not configured", status_code=500)

    if credentials.credentials != expected_token:
        logger.warning(
            "Invalid authentication attempt",
            provided_token_length=len(credentials.credentials),
        )
        raise HTTPException(status_code=401, detail="Invalid authentication token")

    return credentials.credentials


def get_runtime(request: Request) -> MarketRuntime:
    """Dependency returning the application's market runtime."""
    return request.app.state.runtime
