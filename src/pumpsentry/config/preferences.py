"""Persisted user preferences (risk sizing and notification toggles)."""

from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, ValidationError

from .logging import get_logger

logger = get_logger(__name__)


class UserPreferences(BaseModel):
    """Key-value record of user trading and notification preferences."""

    risk_percent: float = Field(10.0, gt=0, le=100)
    leverage: int = Field(5, ge=5, le=5)  # simulated positions are fixed at 5x
    max_notional: float = Field(1150.0, gt=0)
    daily_loss_limit: float = Field(25.0, ge=0)
    min_quote_volume: float = Field(0.0, ge=0)
    notifications_enabled: bool = True


def load_preferences(path: Union[str, Path]) -> UserPreferences:
    """
    Load preferences from a JSON file.

    Falls back to defaults when the file is missing or cannot be parsed.

    Args:
        path: Location of the preferences file

    Returns:
        UserPreferences instance
    """
    prefs_file = Path(path)
    if not prefs_file.exists():
        logger.info("No preferences file, using defaults", path=str(prefs_file))
        return UserPreferences()

    try:
        return UserPreferences.model_validate_json(prefs_file.read_text("utf-8"))
    except (OSError, ValidationError) as e:
        logger.warning(
            "Failed to load preferences, using defaults",
            path=str(prefs_file),
            error=str(e),
        )
        return UserPreferences()


def save_preferences(preferences: UserPreferences, path: Union[str, Path]) -> None:
    """Write preferences to a JSON file, creating parent directories."""
    prefs_file = Path(path)
    prefs_file.parent.mkdir(parents=True, exist_ok=True)
    prefs_file.write_text(preferences.model_dump_json(indent=2), "utf-8")
    logger.info("Preferences saved", path=str(prefs_file))
