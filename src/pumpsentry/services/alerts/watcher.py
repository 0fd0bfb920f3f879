"""Pump alert watcher: deduplicates and throttles outbound alerts per symbol."""

import asyncio
import time
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional, Set

from ...config.logging import get_logger
from ...config.preferences import load_preferences
from ...config.settings import Settings
from ...market.models import NormalizedTicker, ScoredTicker, normalize_event
from ...market.scoring import score_ticker
from ...market.stream import TickerStream
from .models import AlertAction, AlertSink, AlertState

logger = get_logger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000


def format_alert(ticker: ScoredTicker) -> str:
    """Render the alert text for a pumping symbol."""
    return (
        f"🚀 *{ticker.symbol} ACTIVE PUMP*\n\n"
        f"📈 Change: {ticker.price_change_percent:.2f}%\n"
        f"💵 Price: ${ticker.last_price}\n"
        f"📊 Volatility score: {ticker.volatility_score:.1f}\n"
        f"🟢 Buy pressure: {ticker.buy_pressure:.0f}%\n"
        f"⏰ Time: {datetime.now().strftime('%H:%M:%S')}"
    )


class PumpWatcher:
    """
    Tracks symbols whose percent change crosses the pump threshold.

    A symbol gets a new alert when it first crosses the threshold, at most one
    edit of that alert per re-update interval while it stays above, and is
    released once it falls more than the hysteresis margin below the
    threshold. Outbound calls run as background tasks so a slow call for one
    symbol never holds up the others; a symbol with a call in flight is
    suppressed until that call completes.
    """

    def __init__(
        self,
        sink: AlertSink,
        pump_threshold: float = 30.0,
        hysteresis_margin: float = 5.0,
        min_reupdate_interval_ms: float = 10_000,
        quote_suffix: str = "USDT",
        max_concurrent_sends: int = 4,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.logger = logger.bind(component="pump_watcher")
        self.sink = sink
        self.pump_threshold = pump_threshold
        self.release_threshold = pump_threshold - hysteresis_margin
        self.min_reupdate_interval_ms = min_reupdate_interval_ms
        self.quote_suffix = quote_suffix
        self.clock = clock

        self._states: Dict[str, AlertState] = {}
        self._in_flight: Set[str] = set()
        self._tasks: Set[asyncio.Task] = set()
        self._send_slots = asyncio.Semaphore(max_concurrent_sends)

    @classmethod
    def from_settings(cls, sink: AlertSink, settings: Settings) -> "PumpWatcher":
        return cls(
            sink,
            pump_threshold=settings.pump_threshold,
            hysteresis_margin=settings.hysteresis_margin,
            min_reupdate_interval_ms=settings.min_reupdate_interval_ms,
            quote_suffix=settings.quote_suffix,
            max_concurrent_sends=settings.max_concurrent_sends,
        )

    def state(self, symbol: str) -> Optional[AlertState]:
        return self._states.get(symbol)

    @property
    def tracked_symbols(self) -> Set[str]:
        return set(self._states)

    def decide(self, ticker: NormalizedTicker, now: float) -> AlertAction:
        """Decide what to do with one ticker without changing any state."""
        symbol = ticker.symbol
        change = ticker.price_change_percent

        if change >= self.pump_threshold:
            if symbol in self._in_flight:
                return AlertAction.THROTTLED
            state = self._states.get(symbol)
            if state is None:
                return AlertAction.SEND
            elapsed = now - state.last_update_at
            if elapsed >= self.min_reupdate_interval_ms and now > state.last_update_at:
                return AlertAction.EDIT
            return AlertAction.THROTTLED

        if change < self.release_threshold and symbol in self._states:
            return AlertAction.RELEASE

        return AlertAction.IGNORE

    def handle_ticker(self, ticker: NormalizedTicker) -> AlertAction:
        """
        Apply the alert state machine to one ticker.

        Args:
            ticker: Normalized ticker

        Returns:
            The action taken
        """
        now = self.clock()
        action = self.decide(ticker, now)

        if action is AlertAction.RELEASE:
            self._states.pop(ticker.symbol, None)
            self.logger.info(
                "Released pump tracking",
                symbol=ticker.symbol,
                change_percent=ticker.price_change_percent,
            )
        elif action in (AlertAction.SEND, AlertAction.EDIT):
            state = self._states.get(ticker.symbol)
            message_id = state.message_id if state is not None else None
            self._in_flight.add(ticker.symbol)
            task = asyncio.get_running_loop().create_task(
                self._deliver(action, score_ticker(ticker), now, message_id)
            )
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        return action

    def handle_batch(self, raw_events: Iterable[Any]) -> None:
        """Stream handler: normalize each raw event and apply the state machine."""
        for raw in raw_events:
            ticker = normalize_event(raw)
            if ticker is None or not ticker.symbol.endswith(self.quote_suffix):
                continue
            self.handle_ticker(ticker)

    async def _deliver(
        self,
        action: AlertAction,
        ticker: ScoredTicker,
        now: float,
        message_id: Optional[int] = None,
    ) -> None:
        symbol = ticker.symbol
        text = format_alert(ticker)

        try:
            async with self._send_slots:
                if action is AlertAction.SEND:
                    message_id = await self.sink.send_message(text)
                    if message_id is None:
                        self._drop(symbol, "send failed")
                        return
                else:
                    if not await self.sink.edit_message(message_id, text):
                        self._drop(symbol, "edit failed")
                        return

            self._states[symbol] = AlertState(message_id=message_id, last_update_at=now)
            self.logger.info(
                "Pump alert delivered",
                symbol=symbol,
                action=action.value,
                message_id=message_id,
                change_percent=ticker.price_change_percent,
            )
        except Exception as e:
            self.logger.error(
                "Pump alert delivery raised", symbol=symbol, error=str(e), exc_info=True
            )
            self._drop(symbol, "delivery error")
        finally:
            self._in_flight.discard(symbol)

    def _drop(self, symbol: str, reason: str) -> None:
        self._states.pop(symbol, None)
        self.logger.warning("Dropped pump alert state", symbol=symbol, reason=reason)

    async def wait_idle(self) -> None:
        """Wait for every in-flight alert delivery to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


async def run_watcher(settings: Settings, sink: AlertSink) -> None:
    """
    Run the alert watcher on its own stream connection until cancelled.

    Does nothing when notifications are switched off in the user preferences.

    Args:
        settings: Application settings
        sink: Notification sink for alerts
    """
    preferences = load_preferences(settings.preferences_path)
    if not preferences.notifications_enabled:
        logger.warning("Notifications disabled in preferences, watcher not started")
        return

    watcher = PumpWatcher.from_settings(sink, settings)
    stream = TickerStream(
        settings.watcher_stream_url,
        reconnect_delay=settings.reconnect_delay_seconds,
    )
    stream.subscribe(watcher.handle_batch)

    logger.info(
        "Starting pump watcher",
        threshold=settings.pump_threshold,
        release_threshold=settings.release_threshold,
        reupdate_interval_ms=settings.min_reupdate_interval_ms,
    )
    try:
        await stream.run()
    finally:
        await stream.stop()
        await watcher.wait_idle()
