"""Web API for the ingestion and position runtime."""

from .app import create_app
from .runtime import MarketRuntime

__all__ = ["create_app", "MarketRuntime"]
