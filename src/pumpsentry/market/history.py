"""Candle history client for the exchange REST API."""

from typing import List

import aiohttp

from ..config.logging import get_logger
from .models import Kline, parse_klines

logger = get_logger(__name__)


class CandleClient:
    """Fetches OHLCV candles for a symbol."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.logger = logger.bind(component="candle_client")

    async def get_history(
        self, symbol: str, interval: str = "1m", limit: int = 100
    ) -> List[Kline]:
        """
        Fetch recent candles.

        Args:
            symbol: Exchange symbol (e.g. 'BTCUSDT')
            interval: Candle interval (e.g. '1m', '4h')
            limit: Number of candles

        Returns:
            Candles oldest first, or an empty list if the fetch failed
        """
        url = f"{self.base_url}/klines"
        params = {"symbol": symbol, "interval": interval, "limit": limit}

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url, params=params) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        self.logger.warning(
                            "Candle fetch rejected",
                            symbol=symbol,
                            status=response.status,
                            error=error_text,
                        )
                        return []
                    rows = await response.json()
                    return parse_klines(rows)
        except Exception as e:
            self.logger.error(
                "Candle fetch failed", symbol=symbol, interval=interval, error=str(e)
            )
            return []
