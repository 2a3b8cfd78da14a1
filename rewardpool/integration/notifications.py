"""
Notification sinks.

The shell publishes `Staked`, `Unstaked` and `RewardClaimed` notifications
after a successful commit, fire-and-forget.
"""

from __future__ import annotations

import logging
from typing import List, Protocol

from ..core.types import Event, Notification

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def emit(self, notification: Notification) -> None:
        ...


class LoggingSink:
    """Writes each notification to a logger at INFO."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def emit(self, notification: Notification) -> None:
        self._log.info(
            "%s participant=%s amount=%d",
            notification.event.value, notification.participant, notification.amount,
        )


class RecordingSink:
    """Keeps every notification in memory, in emission order."""

    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def emit(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def of(self, event: Event) -> List[Notification]:
        return [n for n in self.notifications if n.event == event]

    def clear(self) -> None:
        self.notifications.clear()
