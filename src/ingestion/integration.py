"""
ServiceIntegration - tracks connector credentials and syncs sources.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ingestion.base import ConnectorError, Credentials, RawRecord, SourceConnector

logger = logging.getLogger(__name__)

STATUS_CONNECTED = "connected"
STATUS_DISCONNECTED = "disconnected"
STATUS_ERROR = "error"


@dataclass
class SyncResult:
    """
    Outcome of a sync across all connected sources.
    """
    records: Dict[str, List[RawRecord]] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(len(records) for records in self.records.values())


class ServiceIntegration:
    """
    Registry of connectors keyed by source name, plus the credentials
    issued to each one.
    """

    def __init__(self, connectors: Iterable[SourceConnector]):
        self.connectors: Dict[str, SourceConnector] = {c.name: c for c in connectors}
        self.credentials: Dict[str, Credentials] = {}

    def _connector(self, source: str) -> SourceConnector:
        try:
            return self.connectors[source]
        except KeyError:
            raise KeyError(f"No connector registered for source '{source}'") from None

    async def connect(self, source: str, auth_code: str) -> Credentials:
        connector = self._connector(source)
        try:
            credentials = await connector.connect(auth_code)
        except ConnectorError:
            raise
        except Exception as e:
            raise ConnectorError(source, f"connection failed: {e}") from e

        self.credentials[source] = credentials
        logger.info(f"Connected {source} (expires {credentials.expires_at.isoformat()})")
        return credentials

    async def fetch(
        self,
        source: str,
        credentials: Optional[Credentials] = None,
        **params: Any,
    ) -> List[RawRecord]:
        """
        Fetch records with the connector's timeout. Timeouts and unexpected
        errors are retried up to ``connector.retries`` attempts; a
        ConnectorError is final.
        """
        connector = self._connector(source)
        credentials = credentials or self.credentials.get(source)
        if credentials is None:
            raise ConnectorError(source, "not connected")

        attempts = max(connector.retries, 1)
        last_exception: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                return await asyncio.wait_for(
                    connector.fetch(credentials, **params),
                    timeout=connector.timeout,
                )

            except ConnectorError:
                raise

            except asyncio.TimeoutError as e:
                last_exception = e
                error = ConnectorError(source, f"fetch timed out after {connector.timeout}s")

            except Exception as e:
                last_exception = e
                error = ConnectorError(source, f"fetch failed: {e}")

            if attempt < attempts:
                logger.warning(f"Attempt {attempt}/{attempts} for {source} failed: {error}, retrying...")

        raise error from last_exception

    def disconnect(self, source: str) -> None:
        self.credentials.pop(source, None)
        logger.info(f"Disconnected {source}")

    def status(self, source: str, now: Optional[datetime] = None) -> str:
        credentials = self.credentials.get(source)
        if credentials is None:
            return STATUS_DISCONNECTED
        if credentials.is_expired(now):
            return STATUS_ERROR
        return STATUS_CONNECTED

    def connected_sources(self) -> List[str]:
        return list(self.credentials.keys())

    async def sync_all(self) -> SyncResult:
        """
        Fetch every connected source concurrently. One source failing
        never affects the others; its error is recorded instead.
        """
        result = SyncResult()
        sources = self.connected_sources()
        if not sources:
            logger.info("No connected sources to sync")
            return result

        outcomes = await asyncio.gather(
            *(self.fetch(source) for source in sources),
            return_exceptions=True,
        )

        for source, outcome in zip(sources, outcomes):
            if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
                raise outcome
            if isinstance(outcome, Exception):
                logger.error(f"Sync failed for {source}: {outcome}")
                result.errors[source] = str(outcome)
                result.records[source] = []
                continue

            result.records[source] = outcome
            logger.info(f"Synced {len(outcome)} records from {source}")

        return result
