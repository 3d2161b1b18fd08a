"""
Log and in-memory notification channels
"""
import logging
from typing import List

from notifications.base import Notification, Notifier

logger = logging.getLogger(__name__)

_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "error": logging.ERROR,
}


class LogNotifier(Notifier):
    name = "log"

    def notify(self, notification: Notification) -> None:
        logger.log(
            _LEVELS.get(notification.level, logging.INFO),
            f"{notification.title}: {notification.message}",
        )


class MemoryNotifier(Notifier):
    """Keeps notifications in a list, newest last."""

    name = "memory"

    def __init__(self, limit: int = 50):
        self.limit = limit
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)
        if len(self.notifications) > self.limit:
            del self.notifications[: len(self.notifications) - self.limit]
