"""
Base classes for Ingestion
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel

from core.entities import RawRecord


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ConnectorError(Exception):
    """
    Raised when a connector cannot connect or fetch.
    """

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


class Credentials(BaseModel):
    """
    Tokens issued by a source after authorization
    """
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: datetime
    scope: List[str] = []

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = _as_utc(now or datetime.now(timezone.utc))
        return _as_utc(self.expires_at) < now


class SourceConnector(ABC):
    """
    Base interface for all source connectors.
    """

    name: str
    timeout: Optional[float] = None  # seconds per fetch, None waits forever
    retries: int = 1  # fetch attempts

    @abstractmethod
    async def connect(self, auth_code: str) -> Credentials:
        """
        Exchange an authorization code for credentials.
        Raises ConnectorError on failure.
        """
        raise NotImplementedError

    @abstractmethod
    async def fetch(self, credentials: Credentials, **params: Any) -> List[RawRecord]:
        """
        Fetch raw records from the source.
        Raises ConnectorError on failure (handled upstream).
        """
        raise NotImplementedError
