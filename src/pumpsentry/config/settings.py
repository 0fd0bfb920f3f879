"""Application settings and configuration management using Pydantic."""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    # Environment and deployment
    environment: str = "development"
    debug: bool = False

    # Telegram settings
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None

    # Market data settings
    stream_url: str = "wss://stream.binance.com:9443/ws/!ticker@arr"
    rest_url: str = "https://api.binance.com/api/v3"
    stream_enabled: bool = True
    quote_suffix: str = "USDT"
    history_length: int = 15
    snapshot_interval_seconds: float = 1.0
    top_movers_limit: int = 30
    reconnect_delay_seconds: float = 5.0

    # Watcher settings
    watcher_stream_url: str = "wss://fstream.binance.com/ws/!ticker@arr"
    pump_threshold: float = 30.0
    hysteresis_margin: float = 5.0
    min_reupdate_interval_ms: int = 10_000
    max_concurrent_sends: int = 4

    # User preferences
    preferences_path: str = "data/preferences.json"

    # API settings
    endpoint_host: str = "0.0.0.0"
    endpoint_port: int = 8000
    endpoint_auth_token: Optional[str] = None
    api_reload: bool = False
    api_log_level: str = "INFO"

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "structured"  # 'structured' or 'plain'
    log_file_enabled: bool = False
    log_file_path: str = "data/pumpsentry.log"
    log_max_file_size: str = "10MB"
    log_backup_count: int = 5

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        valid_environments = ["development", "testing", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("telegram_chat_id")
    @classmethod
    def validate_chat_id(cls, v):
        """Validate that chat_id is numeric (Telegram chat IDs are numeric)."""
        if v is not None and not v.lstrip("-").isdigit():
            raise ValueError("chat_id must be numeric")
        return v

    @field_validator("quote_suffix")
    @classmethod
    def validate_quote_suffix(cls, v):
        """Quote suffixes are matched against upper-case exchange symbols."""
        if not v.strip():
            raise ValueError("Quote suffix must not be empty")
        return v.strip().upper()

    @field_validator("history_length", "top_movers_limit", "max_concurrent_sends")
    @classmethod
    def validate_positive_int(cls, v):
        """Validate sizes and limits are at least one."""
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v

    @field_validator("snapshot_interval_seconds", "reconnect_delay_seconds")
    @classmethod
    def validate_interval(cls, v):
        """Validate timer intervals are positive."""
        if v <= 0:
            raise ValueError("Interval must be greater than 0 seconds")
        return v

    @field_validator("pump_threshold")
    @classmethod
    def validate_threshold(cls, v):
        """Validate pump threshold (percent units)."""
        if v <= 0:
            raise ValueError("Pump threshold must be a positive percentage")
        return v

    @field_validator("hysteresis_margin")
    @classmethod
    def validate_margin(cls, v):
        """Validate hysteresis margin."""
        if v < 0:
            raise ValueError("Hysteresis margin must not be negative")
        return v

    @field_validator("min_reupdate_interval_ms")
    @classmethod
    def validate_reupdate_interval(cls, v):
        """Validate alert re-update interval."""
        if v < 0:
            raise ValueError("Re-update interval must not be negative")
        return v

    @field_validator("endpoint_port")
    @classmethod
    def validate_port(cls, v):
        """Validate port number is in valid range."""
        if v < 1 or v > 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("log_level", "api_log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        valid_formats = ["structured", "plain"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @property
    def release_threshold(self) -> float:
        """Percent change below which a tracked symbol is released."""
        return self.pump_threshold - self.hysteresis_margin


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()


def get_required_env_vars(watcher: bool = False) -> list[str]:
    """
    Get list of required environment variables.

    Args:
        watcher: Whether the alert watcher is being started

    Returns:
        list: List of required environment variable names
    """
    if watcher:
        return ["TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID"]
    return ["ENDPOINT_AUTH_TOKEN"]


def validate_required_settings(watcher: bool = False) -> bool:
    """
    Validate that all required settings are properly configured.

    Returns:
        bool: True if all required settings are present, False otherwise
    """
    settings = get_settings()
    if watcher:
        return bool(settings.telegram_bot_token and settings.telegram_chat_id)
    return bool(settings.endpoint_auth_token)
