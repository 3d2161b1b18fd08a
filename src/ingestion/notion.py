"""
Mock Notion connector producing synthetic workspace pages
"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

from ingestion.base import ConnectorError, Credentials, RawRecord, SourceConnector

_PAGES = (
    ("API reference", "Endpoint overview and auth examples", ["#docs", "#api"]),
    ("Onboarding guide", "Everything a new hire needs in week one", ["#guide", "#team"]),
    ("Meeting notes template", "Reusable template for weekly notes", ["#template", "#meeting"]),
    ("Product roadmap", "Planned features for next quarter", ["#roadmap", "#product"]),
    ("Design system", "Components, colors and typography", ["#design", "#documentation"]),
)

PAGE_COUNT = 75


class NotionConnector(SourceConnector):
    name = "notion"
    TOKEN_TTL = timedelta(hours=24)
    SCOPE = ["read_content", "read_user"]

    def __init__(self, database_id: Optional[str] = None):
        self.database_id = database_id

    async def connect(self, auth_code: str) -> Credentials:
        if not auth_code:
            raise ConnectorError(self.name, "missing authorization code")

        return Credentials(
            access_token=f"notion_token_{secrets.token_hex(8)}",
            refresh_token=f"notion_refresh_{secrets.token_hex(8)}",
            expires_at=datetime.now(timezone.utc) + self.TOKEN_TTL,
            scope=list(self.SCOPE),
        )

    async def fetch(self, credentials: Credentials, **params: Any) -> List[RawRecord]:
        if credentials.is_expired():
            raise ConnectorError(self.name, "credentials expired")

        database = params.get("database_id") or self.database_id or "default"
        now = datetime.now(timezone.utc)
        records: List[RawRecord] = []

        for i in range(PAGE_COUNT):
            title, content, tags = _PAGES[i % len(_PAGES)]
            records.append(
                {
                    "id": f"notion_{i}",
                    "title": f"{title} {i}",
                    "content": content,
                    "database": database,
                    "author": f"editor{i % 4}",
                    "lastEdited": now - timedelta(minutes=2 * i),
                    "tags": list(tags),
                    "status": "published" if i % 3 == 0 else "draft",
                }
            )

        return records
