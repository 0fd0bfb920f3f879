"""Pump alert deduplication and throttling."""

from .models import AlertAction, AlertSink, AlertState
from .watcher import PumpWatcher, format_alert, run_watcher

__all__ = [
    "AlertAction",
    "AlertSink",
    "AlertState",
    "PumpWatcher",
    "format_alert",
    "run_watcher",
]
