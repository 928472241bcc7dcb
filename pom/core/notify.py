from __future__ import annotations

import logging
from typing import Iterable, Protocol

from pom.core.timer import Notification, NotifyEvent


LOGGER = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def notify(self, event: NotifyEvent, title: str, message: str) -> None:
        """Show a notification; delivery is best-effort."""


def dispatch(sink: NotificationSink, notifications: Iterable[Notification]) -> int:
    """Forward notifications in order and return how many were delivered.

    Sink failures are logged and dropped so the timer never depends on
    delivery succeeding.
    """
    delivered = 0
    for notification in notifications:
        try:
            sink.notify(notification.event, notification.title, notification.message)
        except Exception:
            LOGGER.warning("Notification %s was not delivered", notification.event.value, exc_info=True)
            continue
        delivered += 1
    return delivered
