"""Shared test configuration and fixtures."""

from typing import Any, Dict
from unittest.mock import AsyncMock, Mock, patch

import pytest

from pumpsentry.config.settings import get_settings
from pumpsentry.market.buffer import TickerBuffer


def make_raw_event(
    symbol: str = "PEPEUSDT",
    price: float = 1.0,
    change: float = 0.0,
    volume: float = 1_000_000.0,
    high: float = None,
    low: float = None,
) -> Dict[str, Any]:
    """Build a raw all-market ticker element as the exchange sends it."""
    return {
        "e": "24hrTicker",
        "s": symbol,
        "c": str(price),
        "P": str(change),
        "h": str(high if high is not None else price),
        "l": str(low if low is not None else price),
        "q": str(volume),
    }


@pytest.fixture
def raw_event():
    """Factory fixture for raw ticker events."""
    return make_raw_event


@pytest.fixture
def ticker_buffer():
    """Empty ticker buffer with default settings."""
    return TickerBuffer()


@pytest.fixture
def mock_alert_sink():
    """Notification sink that always succeeds."""
    sink = Mock()
    sink.send_message = AsyncMock(return_value=101)
    sink.edit_message = AsyncMock(return_value=True)
    return sink


@pytest.fixture(autouse=True)
def test_env():
    """Keep tests off the network and away from a developer's .env values."""
    with patch.dict(
        "os.environ",
        {
            "ENVIRONMENT": "testing",
            "STREAM_ENABLED": "false",
            "ENDPOINT_AUTH_TOKEN": "test_endpoint_token",
            "TELEGRAM_BOT_TOKEN": "test_bot_token_123456",
            "TELEGRAM_CHAT_ID": "123456",
            "LOG_FILE_ENABLED": "false",
        },
    ):
        get_settings.cache_clear()
        yield
    get_settings.cache_clear()
