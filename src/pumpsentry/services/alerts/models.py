"""Data models for pump alert tracking."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol


class AlertAction(Enum):
    """Outcome of evaluating one ticker against the alert state."""

    SEND = "send"
    EDIT = "edit"
    THROTTLED = "throttled"
    RELEASE = "release"
    IGNORE = "ignore"


@dataclass(frozen=True)
class AlertState:
    """Remote alert handle and the time (ms) of its last accepted update."""

    message_id: int
    last_update_at: float


class AlertSink(Protocol):
    """Notification sink that can send new alerts and edit sent ones."""

    async def send_message(self, text: str) -> Optional[int]:
        """Send a new alert; returns its handle or None on failure."""
        ...

    async def edit_message(self, message_id: int, text: str) -> bool:
        """Edit an alert in place; returns False on failure."""
        ...
