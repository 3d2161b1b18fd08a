"""
Sync Pipeline - pulls every connected source and turns raw records into
classified items.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from core.entities import DataItem
from ingestion.base import ConnectorError, Credentials
from ingestion.integration import ServiceIntegration
from notifications.base import Notification, Notifier
from services.data_processor import DataProcessingService
from workflows.base import Workflow

logger = logging.getLogger(__name__)


class SyncPipeline(Workflow):
    """
    Connects sources, syncs them concurrently and appends the resulting
    items to a copy of the caller's collection.
    """

    name = "sync"

    def __init__(
        self,
        integration: ServiceIntegration,
        processor: DataProcessingService,
        notifiers: Optional[Iterable[Notifier]] = None,
    ):
        self.integration = integration
        self.processor = processor
        self.notifiers = list(notifiers or [])

    def _notify(self, level: str, title: str, message: str) -> None:
        notification = Notification(level=level, title=title, message=message)
        for notifier in self.notifiers:
            try:
                notifier.notify(notification)
            except Exception as e:
                logger.error(f"Notifier {notifier.name} failed: {e}")

    async def connect_all(self, auth_codes: Dict[str, str]) -> Dict[str, Credentials]:
        """
        Connect every registered source that has an auth code.
        A failed connection is reported and skipped.
        """
        connected: Dict[str, Credentials] = {}

        for source in self.integration.connectors:
            auth_code = auth_codes.get(source)
            if not auth_code:
                logger.info(f"No auth code for {source}, skipping")
                continue

            try:
                connected[source] = await self.integration.connect(source, auth_code)
                self._notify("success", "Connected", f"{source} connected")
            except ConnectorError as e:
                logger.error(f"Connection failed for {source}: {e}")
                self._notify("error", "Connection failed", str(e))

        return connected

    async def run(self, items: Sequence[DataItem] = ()) -> List[DataItem]:
        collection = list(items)
        seen_ids = {item.id for item in collection}

        result = await self.integration.sync_all()

        for source, error in result.errors.items():
            self._notify("error", "Sync failed", f"Sync failed for {source}: {error}")

        added = 0
        for source, records in result.records.items():
            try:
                built = self.processor.build_items(records, source)
            except Exception as e:
                logger.exception(f"[{self.name}] Could not process records from {source}: {e}")
                self._notify("error", "Sync failed", f"Could not process {source} records")
                continue

            for item in built:
                if item.id in seen_ids:
                    continue
                seen_ids.add(item.id)
                collection.append(item)
                added += 1

            logger.info(f"[{self.name}] {source}: {len(built)} records processed")

        if added:
            # Derived results for the old collection are stale now
            for prefix in ("stats_", "filter_", "rank_"):
                self.processor.clear_cache(prefix)

        if result.records and not result.errors:
            self._notify("success", "Sync complete", f"Added {added} items")
        elif len(result.errors) < len(result.records):
            self._notify("info", "Sync partially complete", f"Added {added} items")

        logger.info(f"[{self.name}] Collection: {len(items)} -> {len(collection)} items")
        return collection
