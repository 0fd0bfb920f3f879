"""Market data models for ticker streams and candle history."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class RawTickerEvent(BaseModel):
    """One element of the exchange's all-market ticker array.

    Numeric fields arrive as strings and are coerced here; infinities and NaN
    are rejected so nothing non-finite reaches the scoring engine.
    """

    model_config = ConfigDict(allow_inf_nan=False, extra="ignore")

    symbol: str = Field(..., alias="s", min_length=1)
    last_price: float = Field(..., alias="c")
    price_change_percent: float = Field(..., alias="P")
    high: float = Field(..., alias="h")
    low: float = Field(..., alias="l")
    volume: float = Field(..., alias="q")


@dataclass(frozen=True)
class NormalizedTicker:
    """A single point-in-time quote for a symbol."""

    symbol: str
    last_price: float
    price_change_percent: float  # signed, percent units
    high: float
    low: float
    volume: float  # quote volume


@dataclass(frozen=True)
class ScoredTicker:
    """Normalized ticker annotated with momentum scores."""

    symbol: str
    last_price: float
    price_change_percent: float
    high: float
    low: float
    volume: float
    volatility_score: float
    buy_pressure: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "last_price": self.last_price,
            "price_change_percent": self.price_change_percent,
            "high": self.high,
            "low": self.low,
            "volume": self.volume,
            "volatility_score": self.volatility_score,
            "buy_pressure": self.buy_pressure,
        }


@dataclass(frozen=True)
class Kline:
    """OHLCV candle."""

    time: float  # epoch seconds
    open: float
    high: float
    low: float
    close: float
    volume: float


def normalize_event(raw: Any) -> Optional[NormalizedTicker]:
    """
    Adapt a raw stream event into a NormalizedTicker.

    Args:
        raw: Decoded JSON object from the ticker stream

    Returns:
        NormalizedTicker, or None if the event is malformed
    """
    try:
        event = RawTickerEvent.model_validate(raw)
    except ValidationError:
        return None

    return NormalizedTicker(
        symbol=event.symbol,
        last_price=event.last_price,
        price_change_percent=event.price_change_percent,
        high=event.high,
        low=event.low,
        volume=event.volume,
    )


def parse_klines(rows: List[List[Any]]) -> List[Kline]:
    """Convert the exchange's kline array rows into Kline objects."""
    return [
        Kline(
            time=row[0] / 1000,
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[4]),
            volume=float(row[5]),
        )
        for row in rows
    ]
