"""Tests for settings validation and persisted preferences."""

import logging
import logging.handlers
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from pumpsentry.config.logging import _parse_file_size, setup_logging
from pumpsentry.config.preferences import UserPreferences, load_preferences, save_preferences
from pumpsentry.config.settings import (
    Settings,
    get_required_env_vars,
    get_settings,
    validate_required_settings,
)


class TestSettings:
    """Test the Settings model."""

    def test_defaults(self):
        settings = Settings()

        assert settings.pump_threshold == 30.0
        assert settings.hysteresis_margin == 5.0
        assert settings.release_threshold == 25.0
        assert settings.min_reupdate_interval_ms == 10_000
        assert settings.history_length == 15
        assert settings.reconnect_delay_seconds == 5.0
        assert settings.quote_suffix == "USDT"

    def test_reads_environment(self):
        settings = get_settings()
        assert settings.environment == "testing"
        assert settings.endpoint_auth_token == "test_endpoint_token"

    def test_quote_suffix_uppercased(self):
        assert Settings(quote_suffix=" usdc ").quote_suffix == "USDC"

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="staging")

    def test_non_numeric_chat_id(self):
        with pytest.raises(ValidationError):
            Settings(telegram_chat_id="not-a-chat")

    def test_negative_chat_id_allowed(self):
        assert Settings(telegram_chat_id="-100123").telegram_chat_id == "-100123"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("history_length", 0),
            ("snapshot_interval_seconds", 0),
            ("reconnect_delay_seconds", -1),
            ("pump_threshold", 0),
            ("hysteresis_margin", -1),
            ("endpoint_port", 70000),
        ],
    )
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})

    def test_required_vars_per_mode(self):
        assert get_required_env_vars() == ["ENDPOINT_AUTH_TOKEN"]
        assert get_required_env_vars(watcher=True) == ["TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID"]

    def test_validate_required_settings(self):
        assert validate_required_settings()
        assert validate_required_settings(watcher=True)

    def test_validate_required_settings_missing_token(self):
        with patch.dict(os.environ, {"ENDPOINT_AUTH_TOKEN": ""}):
            get_settings.cache_clear()
            assert not validate_required_settings()


class TestPreferences:
    """Test loading and saving user preferences."""

    def test_missing_file_gives_defaults(self, tmp_path):
        prefs = load_preferences(tmp_path / "missing.json")
        assert prefs == UserPreferences()
        assert prefs.leverage == 5

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "preferences.json"
        save_preferences(UserPreferences(risk_percent=5.0, min_quote_volume=1e6), path)

        loaded = load_preferences(path)
        assert loaded.risk_percent == 5.0
        assert loaded.min_quote_volume == 1e6

    def test_corrupt_file_gives_defaults(self, tmp_path):
        path = tmp_path / "preferences.json"
        path.write_text("{broken", "utf-8")
        assert load_preferences(path) == UserPreferences()

    def test_leverage_is_fixed(self):
        with pytest.raises(ValidationError):
            UserPreferences(leverage=10)


class TestLogging:
    """Test logging setup helpers."""

    @pytest.mark.parametrize(
        "size,expected",
        [("512", 512), ("10KB", 10 * 1024), ("10mb", 10 * 1024 * 1024), ("1GB", 1024**3)],
    )
    def test_parse_file_size(self, size, expected):
        assert _parse_file_size(size) == expected

    def test_file_logging_creates_directory(self, tmp_path):
        log_file = tmp_path / "logs" / "pumpsentry.log"
        root = logging.getLogger()
        before = list(root.handlers)

        try:
            setup_logging(level="DEBUG", format_type="plain", file_enabled=True, file_path=str(log_file))
            assert log_file.parent.is_dir()
            assert any(
                isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers
            )
        finally:
            for handler in list(root.handlers):
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()
