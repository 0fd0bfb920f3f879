"""Configuration and environment utilities."""

from pathlib import Path

from ..config.logging import get_logger, setup_logging
from ..config.settings import (
    get_required_env_vars,
    get_settings,
    validate_required_settings,
)


def initialize_application() -> None:
    """Initialize application configuration and logging."""
    settings = get_settings()

    setup_logging(
        level=settings.log_level,
        format_type=settings.log_format,
        file_enabled=settings.log_file_enabled,
        file_path=settings.log_file_path,
        max_file_size=settings.log_max_file_size,
        backup_count=settings.log_backup_count,
    )

    # Preferences are saved next to other runtime data
    Path(settings.preferences_path).parent.mkdir(parents=True, exist_ok=True)

    logger = get_logger(__name__)
    logger.info(
        "Application initialized successfully",
        environment=settings.environment,
        debug=settings.debug,
    )


def validate_environment(watcher: bool = False) -> bool:
    """
    Validate that all required environment variables are set.

    Args:
        watcher: Validate for the alert watcher instead of the API

    Returns:
        True if all required variables are set, False otherwise
    """
    return validate_required_settings(watcher=watcher)


def missing_env_vars_message(watcher: bool = False) -> str:
    """Human-readable list of the variables a mode needs."""
    return f"Required variables: {', '.join(get_required_env_vars(watcher=watcher))}"
