"""Market data ingestion and momentum scoring."""

from .buffer import TickerBuffer
from .history import CandleClient
from .models import Kline, NormalizedTicker, RawTickerEvent, ScoredTicker, normalize_event
from .scoring import MomentumScore, score, score_ticker
from .stream import TickerStream

__all__ = [
    "TickerBuffer",
    "CandleClient",
    "Kline",
    "NormalizedTicker",
    "RawTickerEvent",
    "ScoredTicker",
    "normalize_event",
    "MomentumScore",
    "score",
    "score_ticker",
    "TickerStream",
]
