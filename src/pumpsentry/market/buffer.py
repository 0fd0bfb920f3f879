"""Ticker ingestion buffer holding the latest scored state per symbol."""

from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Optional

from ..config.logging import get_logger
from .models import ScoredTicker, normalize_event
from .scoring import score_ticker

logger = get_logger(__name__)

DEFAULT_HISTORY_LENGTH = 15


class TickerBuffer:
    """
    Absorbs raw ticker batches and keeps the latest scored ticker per symbol.

    Consumers read :meth:`snapshot` on a fixed cadence instead of reacting to
    every update; the table only ever holds the latest value per symbol.
    """

    def __init__(
        self,
        quote_suffix: str = "USDT",
        history_length: int = DEFAULT_HISTORY_LENGTH,
    ):
        self.logger = logger.bind(component="ticker_buffer")
        self.quote_suffix = quote_suffix
        self.history_length = history_length
        self._tickers: Dict[str, ScoredTicker] = {}
        self._history: Dict[str, Deque[float]] = {}

    def ingest(self, raw_events: Iterable[Any]) -> int:
        """
        Normalize, score and store a batch of raw ticker events.

        Symbols outside the quote suffix are skipped and malformed events are
        dropped without aborting the rest of the batch.

        Args:
            raw_events: Decoded events from one stream message

        Returns:
            Number of events accepted into the buffer
        """
        accepted = 0
        dropped = 0

        for raw in raw_events:
            symbol = raw.get("s") if isinstance(raw, dict) else None
            if isinstance(symbol, str) and not symbol.endswith(self.quote_suffix):
                continue

            ticker = normalize_event(raw)
            if ticker is None:
                dropped += 1
                continue

            scored = score_ticker(ticker)
            history = self._history.get(ticker.symbol)
            if history is None:
                history = deque(maxlen=self.history_length)
                self._history[ticker.symbol] = history
            history.append(ticker.last_price)
            self._tickers[ticker.symbol] = scored
            accepted += 1

        if dropped:
            self.logger.debug("Dropped malformed ticker events", dropped=dropped)

        return accepted

    def snapshot(self) -> List[ScoredTicker]:
        """Return the latest scored ticker for every known symbol."""
        return list(self._tickers.values())

    def get(self, symbol: str) -> Optional[ScoredTicker]:
        return self._tickers.get(symbol)

    def history(self, symbol: str) -> List[float]:
        """Recent prices for a symbol, oldest first."""
        return list(self._history.get(symbol, ()))

    def top_movers(self, limit: int = 30, min_volume: float = 0.0) -> List[ScoredTicker]:
        """
        Snapshot ranked by percent change, biggest gainers first.

        Args:
            limit: Maximum number of tickers to return
            min_volume: Minimum quote volume for a ticker to be included

        Returns:
            List of scored tickers
        """
        candidates = [t for t in self._tickers.values() if t.volume >= min_volume]
        candidates.sort(key=lambda t: t.price_change_percent, reverse=True)
        return candidates[:limit]

    def __len__(self) -> int:
        return len(self._tickers)
