"""Momentum scoring for normalized tickers.

Both scores are pure functions of a single ticker's fields:

* ``buy_pressure`` centres on a neutral 50 and moves 4 points per percent of
  price change, clamped to [10, 95].
* ``volatility_score`` blends the absolute percent move (weight 0.4) with a
  log-compressed quote volume term (weight 35), capped at 100.
"""

import math
from dataclasses import dataclass

from .models import NormalizedTicker, ScoredTicker

BUY_PRESSURE_MIN = 10.0
BUY_PRESSURE_MAX = 95.0
BUY_PRESSURE_NEUTRAL = 50.0
BUY_PRESSURE_SENSITIVITY = 4.0

VOLATILITY_MAX = 100.0
CHANGE_WEIGHT = 0.4
VOLUME_WEIGHT = 35.0


@dataclass(frozen=True)
class MomentumScore:
    """Scores derived from a single ticker."""

    volatility_score: float
    buy_pressure: float


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


def _finite_or(value: float, default: float) -> float:
    return value if math.isfinite(value) else default


def volume_impact(volume: float) -> float:
    """Log-compressed volume contribution; zero, negative or NaN volume gives 0."""
    volume = max(_finite_or(volume, 0.0), 0.0)
    return math.log10(volume + 1) / 4


def score(ticker: NormalizedTicker) -> MomentumScore:
    """
    Derive the volatility score and buy pressure for a ticker.

    Args:
        ticker: Normalized ticker

    Returns:
        MomentumScore with both values finite and clamped
    """
    change = _finite_or(ticker.price_change_percent, 0.0)

    buy_pressure = clamp(
        BUY_PRESSURE_NEUTRAL + change * BUY_PRESSURE_SENSITIVITY,
        BUY_PRESSURE_MIN,
        BUY_PRESSURE_MAX,
    )
    volatility = min(
        abs(change) * CHANGE_WEIGHT + volume_impact(ticker.volume) * VOLUME_WEIGHT,
        VOLATILITY_MAX,
    )

    return MomentumScore(volatility_score=volatility, buy_pressure=buy_pressure)


def score_ticker(ticker: NormalizedTicker) -> ScoredTicker:
    """Annotate a normalized ticker with its momentum scores."""
    result = score(ticker)
    return ScoredTicker(
        symbol=ticker.symbol,
        last_price=ticker.last_price,
        price_change_percent=ticker.price_change_percent,
        high=ticker.high,
        low=ticker.low,
        volume=ticker.volume,
        volatility_score=result.volatility_score,
        buy_pressure=result.buy_pressure,
    )
