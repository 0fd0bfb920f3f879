"""Configuration management for PumpSentry application."""

from .logging import get_logger, setup_logging
from .preferences import UserPreferences, load_preferences, save_preferences
from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "UserPreferences",
    "load_preferences",
    "save_preferences",
]
