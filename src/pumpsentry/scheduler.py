"""Scheduler configuration and the snapshot publishing job."""

from typing import List, Optional

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED
from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from .config.logging import get_logger
from .market.buffer import TickerBuffer
from .market.models import ScoredTicker

logger = get_logger(__name__)

SNAPSHOT_JOB_ID = "snapshot_publisher"


def create_scheduler() -> AsyncIOScheduler:
    """
    Create and configure an AsyncIOScheduler with in-memory jobs.

    Returns:
        Configured AsyncIOScheduler instance (not started)
    """
    job_defaults = {
        "coalesce": True,  # A late snapshot only needs to run once
        "max_instances": 1,
        "misfire_grace_time": 5,
    }

    scheduler = AsyncIOScheduler(job_defaults=job_defaults, timezone="UTC")
    scheduler.add_listener(job_executed_listener, EVENT_JOB_EXECUTED)
    scheduler.add_listener(job_error_listener, EVENT_JOB_ERROR)

    return scheduler


def job_executed_listener(event):
    """Log successful job executions."""
    logger.debug("Job executed", job_id=event.job_id)


def job_error_listener(event):
    """Log job execution errors."""
    logger.error(
        "Job crashed",
        job_id=event.job_id,
        error=str(event.exception),
        traceback=event.traceback,
    )


class ScheduledTask:
    """Cancellable handle for a scheduled job."""

    def __init__(self, job: Job):
        self.job = job
        self.cancelled = False

    @property
    def job_id(self) -> str:
        return self.job.id

    def cancel(self) -> None:
        """Remove the job; later calls are no-ops."""
        if self.cancelled:
            return
        try:
            self.job.remove()
        except JobLookupError:
            pass  # Already removed with the scheduler
        self.cancelled = True


class SnapshotPublisher:
    """Publishes the buffer's top movers to consumers on a fixed cadence."""

    def __init__(
        self,
        buffer: TickerBuffer,
        limit: int = 30,
        min_volume: float = 0.0,
    ):
        self.buffer = buffer
        self.limit = limit
        self.min_volume = min_volume
        self.latest: List[ScoredTicker] = []
        self.publish_count = 0

    async def publish(self) -> List[ScoredTicker]:
        """Refresh the published view from the buffer."""
        self.latest = self.buffer.top_movers(self.limit, self.min_volume)
        self.publish_count += 1
        return self.latest


def schedule_snapshot_job(
    scheduler: AsyncIOScheduler,
    publisher: SnapshotPublisher,
    interval_seconds: float = 1.0,
    job_id: Optional[str] = None,
) -> ScheduledTask:
    """
    Add the snapshot publishing job to the scheduler.

    Args:
        scheduler: Scheduler to add the job to
        publisher: Publisher whose ``publish`` runs on each tick
        interval_seconds: Publishing cadence
        job_id: Optional job identifier

    Returns:
        ScheduledTask handle for cancelling the job
    """
    job = scheduler.add_job(
        func=publisher.publish,
        trigger="interval",
        seconds=interval_seconds,
        id=job_id or SNAPSHOT_JOB_ID,
        name="Snapshot Publisher",
        replace_existing=True,
    )

    logger.info(
        "Added snapshot publishing job",
        job_id=job.id,
        interval_seconds=interval_seconds,
    )
    return ScheduledTask(job)
