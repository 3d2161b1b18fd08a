"""
Module to contain base class for notification channels
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Notification:
    """
    Transient user-visible message.
    """
    level: str  # info, success, error
    title: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier(ABC):
    """
    Base interface for all notification channels.
    """

    name: str

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """
        Surface the notification.
        Must NEVER raise; a failing notifier cannot break a sync.
        """
        raise NotImplementedError
