"""Tests for scheduler configuration and the snapshot publishing job."""

from unittest.mock import Mock, patch

import pytest
from apscheduler.jobstores.base import JobLookupError

from pumpsentry.market.buffer import TickerBuffer
from pumpsentry.scheduler import (
    SNAPSHOT_JOB_ID,
    ScheduledTask,
    SnapshotPublisher,
    create_scheduler,
    job_error_listener,
    job_executed_listener,
    schedule_snapshot_job,
)


class TestCreateScheduler:
    """Test scheduler creation functionality."""

    @patch("pumpsentry.scheduler.AsyncIOScheduler")
    def test_create_scheduler(self, mock_scheduler_cls):
        """Test that scheduler is created with correct configuration."""
        mock_scheduler = Mock()
        mock_scheduler_cls.return_value = mock_scheduler

        scheduler = create_scheduler()

        assert scheduler == mock_scheduler
        call_kwargs = mock_scheduler_cls.call_args[1]
        assert call_kwargs["job_defaults"]["coalesce"] is True
        assert call_kwargs["job_defaults"]["max_instances"] == 1
        assert call_kwargs["timezone"] == "UTC"
        assert mock_scheduler.add_listener.call_count == 2

    def test_listeners_accept_events(self):
        """Listeners only log and never raise."""
        event = Mock(job_id="snapshot_publisher", exception=RuntimeError("boom"), traceback="tb")
        job_executed_listener(event)
        job_error_listener(event)


class TestScheduledTask:
    """Test the cancellable job handle."""

    def test_cancel_removes_job_once(self):
        job = Mock(id="snapshot_publisher")
        task = ScheduledTask(job)

        task.cancel()
        task.cancel()

        job.remove.assert_called_once()
        assert task.cancelled
        assert task.job_id == "snapshot_publisher"

    def test_cancel_tolerates_missing_job(self):
        job = Mock(id="gone")
        job.remove.side_effect = JobLookupError("gone")
        task = ScheduledTask(job)

        task.cancel()

        assert task.cancelled


class TestSnapshotPublisher:
    """Test publishing the buffer's top movers."""

    @pytest.mark.asyncio
    async def test_publish_refreshes_latest(self, raw_event):
        buffer = TickerBuffer()
        publisher = SnapshotPublisher(buffer, limit=2)
        assert publisher.latest == []

        buffer.ingest(
            [
                raw_event("AUSDT", change=1.0),
                raw_event("BUSDT", change=50.0),
                raw_event("CUSDT", change=20.0),
            ]
        )
        latest = await publisher.publish()

        assert [t.symbol for t in latest] == ["BUSDT", "CUSDT"]
        assert publisher.latest is latest
        assert publisher.publish_count == 1

    @pytest.mark.asyncio
    async def test_publish_applies_volume_floor(self, raw_event):
        buffer = TickerBuffer()
        publisher = SnapshotPublisher(buffer, min_volume=100.0)
        buffer.ingest([raw_event("AUSDT", volume=10.0), raw_event("BUSDT", volume=500.0)])

        latest = await publisher.publish()

        assert [t.symbol for t in latest] == ["BUSDT"]


class TestScheduleSnapshotJob:
    """Test adding the snapshot job."""

    def test_schedule_snapshot_job(self):
        scheduler = Mock()
        scheduler.add_job.return_value = Mock(id=SNAPSHOT_JOB_ID)
        publisher = SnapshotPublisher(TickerBuffer())

        task = schedule_snapshot_job(scheduler, publisher, interval_seconds=0.5)

        call_kwargs = scheduler.add_job.call_args[1]
        assert call_kwargs["func"] == publisher.publish
        assert call_kwargs["trigger"] == "interval"
        assert call_kwargs["seconds"] == 0.5
        assert call_kwargs["id"] == SNAPSHOT_JOB_ID
        assert isinstance(task, ScheduledTask)
        assert task.job_id == SNAPSHOT_JOB_ID

    def test_schedule_snapshot_job_custom_id(self):
        scheduler = Mock()
        scheduler.add_job.return_value = Mock(id="custom")

        schedule_snapshot_job(scheduler, SnapshotPublisher(TickerBuffer()), job_id="custom")

        assert scheduler.add_job.call_args[1]["id"] == "custom"
