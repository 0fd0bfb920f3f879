"""Simulated leveraged position tracking against live snapshots."""

import math
import threading
from datetime import datetime, timezone
from typing import Optional

from ...config.logging import get_logger
from ...exceptions import NoMarketDataError, PositionAlreadyOpenError
from ...market.buffer import TickerBuffer
from .models import LEVERAGE, Direction, PnLView, PumpAnalysis, SimulatedPosition

logger = get_logger(__name__)

DEFAULT_TAKE_PROFIT_PERCENT = 10.0


def size_notional(
    equity: float,
    risk_percent: float,
    max_notional: Optional[float] = None,
    leverage: int = LEVERAGE,
) -> float:
    """
    Notional exposure for an account of ``equity`` risking ``risk_percent``.

    Args:
        equity: Account equity in quote currency
        risk_percent: Percent of equity committed as margin
        max_notional: Optional cap on the result
        leverage: Position leverage

    Returns:
        Notional in quote currency
    """
    notional = equity * (risk_percent / 100) * leverage
    if max_notional is not None:
        notional = min(notional, max_notional)
    return notional


def take_profit_from_analysis(analysis: Optional[PumpAnalysis]) -> Optional[float]:
    """Recommended take-profit price from an analysis result, if any."""
    if analysis is None or analysis.recommended_params is None:
        return None
    return analysis.recommended_params.take_profit_price


def default_take_profit(
    direction: Direction,
    entry_price: float,
    distance_percent: float = DEFAULT_TAKE_PROFIT_PERCENT,
) -> float:
    """Take-profit ``distance_percent`` away from entry in the position's favour."""
    if direction is Direction.SHORT:
        return entry_price * (1 - distance_percent / 100)
    return entry_price * (1 + distance_percent / 100)


def calculate_pnl_percent(
    direction: Direction,
    entry_price: float,
    current_price: float,
    leverage: int = LEVERAGE,
) -> float:
    """Leveraged percent P&L. Unbounded: there is no liquidation floor."""
    if direction is Direction.LONG:
        move = current_price - entry_price
    else:
        move = entry_price - current_price
    return move / entry_price * 100 * leverage


class PositionTracker:
    """Holds at most one simulated position and prices it on demand."""

    def __init__(self, buffer: TickerBuffer):
        self.logger = logger.bind(component="position_tracker")
        self.buffer = buffer
        self._position: Optional[SimulatedPosition] = None
        self._lock = threading.Lock()

    @property
    def position(self) -> Optional[SimulatedPosition]:
        return self._position

    @property
    def is_open(self) -> bool:
        return self._position is not None

    def open(
        self,
        symbol: str,
        direction: Direction,
        notional: float,
        take_profit_price: Optional[float] = None,
    ) -> SimulatedPosition:
        """
        Open a simulated position at the symbol's current snapshot price.

        Args:
            symbol: Symbol to trade
            direction: LONG or SHORT
            notional: Exposure in quote currency
            take_profit_price: Optional target price; defaults to 10% in the
                position's favour from entry

        Returns:
            The opened position

        Raises:
            PositionAlreadyOpenError: If a position is already open
            NoMarketDataError: If the symbol has no snapshot (or no usable price)
            ValueError: If notional is not a positive finite number
        """
        if not math.isfinite(notional) or notional <= 0:
            raise ValueError("Notional must be a positive finite number")

        with self._lock:
            if self._position is not None:
                raise PositionAlreadyOpenError(self._position.symbol)

            ticker = self.buffer.get(symbol)
            if ticker is None or ticker.last_price <= 0:
                raise NoMarketDataError(symbol)

            position = SimulatedPosition(
                symbol=symbol,
                entry_price=ticker.last_price,
                notional=notional,
                direction=direction,
                opened_at=datetime.now(timezone.utc),
                take_profit_price=(
                    take_profit_price
                    if take_profit_price is not None
                    else default_take_profit(direction, ticker.last_price)
                ),
            )
            self._position = position

        self.logger.info(
            "Opened simulated position",
            symbol=symbol,
            direction=direction.value,
            entry_price=position.entry_price,
            notional=notional,
            leverage=position.leverage,
        )
        return position

    def evaluate(self) -> Optional[PnLView]:
        """
        Price the open position against the latest snapshot.

        Returns:
            PnLView, or None when no position is open or its symbol has no
            snapshot any more
        """
        with self._lock:
            position = self._position
            if position is None:
                return None
            ticker = self.buffer.get(position.symbol)

        if ticker is None:
            return None

        current_price = ticker.last_price
        pnl_percent = calculate_pnl_percent(
            position.direction, position.entry_price, current_price, position.leverage
        )

        target = position.take_profit_price
        if target is None:
            reached = False
        elif position.direction is Direction.LONG:
            reached = current_price >= target
        else:
            reached = current_price <= target

        return PnLView(
            symbol=position.symbol,
            direction=position.direction,
            entry_price=position.entry_price,
            current_price=current_price,
            leverage=position.leverage,
            notional=position.notional,
            pnl_percent=pnl_percent,
            pnl_absolute=position.notional * pnl_percent / 100,
            take_profit_price=target,
            take_profit_reached=reached,
        )

    def close(self) -> None:
        """Discard the open position, if any."""
        with self._lock:
            position = self._position
            self._position = None

        if position is not None:
            self.logger.info("Closed simulated position", symbol=position.symbol)
