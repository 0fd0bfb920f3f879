"""Ingestion and position runtime owned by the web application."""

import asyncio
from contextlib import suppress
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from ..config.logging import get_logger
from ..config.preferences import UserPreferences, load_preferences
from ..config.settings import Settings
from ..market.buffer import TickerBuffer
from ..market.history import CandleClient
from ..market.stream import TickerStream
from ..scheduler import (
    ScheduledTask,
    SnapshotPublisher,
    create_scheduler,
    schedule_snapshot_job,
)
from ..services.position.tracker import PositionTracker

logger = get_logger(__name__)


class MarketRuntime:
    """
    Buffer, tracker, stream and snapshot job for one process.

    Components are built eagerly so request handlers can use them; the
    stream task and snapshot job only run between :meth:`start` and
    :meth:`stop`.
    """

    def __init__(
        self,
        settings: Settings,
        preferences: Optional[UserPreferences] = None,
    ):
        self.settings = settings
        self.preferences = preferences or load_preferences(settings.preferences_path)
        self.logger = logger.bind(component="market_runtime")

        self.buffer = TickerBuffer(
            quote_suffix=settings.quote_suffix,
            history_length=settings.history_length,
        )
        self.tracker = PositionTracker(self.buffer)
        self.publisher = SnapshotPublisher(
            self.buffer,
            limit=settings.top_movers_limit,
            min_volume=self.preferences.min_quote_volume,
        )
        self.candles = CandleClient(settings.rest_url)
        self.stream = TickerStream(
            settings.stream_url,
            reconnect_delay=settings.reconnect_delay_seconds,
        )
        self.stream.subscribe(self.buffer.ingest)

        self.scheduler: Optional[AsyncIOScheduler] = None
        self.snapshot_task: Optional[ScheduledTask] = None
        self.stream_task: Optional[asyncio.Task] = None

    def apply_preferences(self, preferences: UserPreferences) -> None:
        """Swap in new preferences; the next snapshot uses the new volume floor."""
        self.preferences = preferences
        self.publisher.min_volume = preferences.min_quote_volume

    @property
    def running(self) -> bool:
        return self.stream_task is not None and not self.stream_task.done()

    async def start(self) -> None:
        """Start the stream consumer and the snapshot job."""
        if self.running:
            return

        self.stream_task = asyncio.create_task(self.stream.run())

        self.scheduler = create_scheduler()
        self.scheduler.start()
        self.snapshot_task = schedule_snapshot_job(
            self.scheduler,
            self.publisher,
            interval_seconds=self.settings.snapshot_interval_seconds,
        )
        self.logger.info("Market runtime started")

    async def stop(self) -> None:
        """Cancel the snapshot job and close the stream."""
        if self.snapshot_task is not None:
            self.snapshot_task.cancel()
            self.snapshot_task = None

        if self.scheduler is not None and self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        self.scheduler = None

        await self.stream.stop()
        if self.stream_task is not None:
            self.stream_task.cancel()
            with suppress(asyncio.CancelledError):
                await self.stream_task
            self.stream_task = None

        self.logger.info("Market runtime stopped")
