"""
Mock Slack connector producing synthetic channel messages
"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

from ingestion.base import ConnectorError, Credentials, RawRecord, SourceConnector

_MESSAGES = (
    "Daily #standup: API integration is blocked, need #help",
    "Great #team progress on the design system #collaboration",
    "Reminder: #meeting at 3pm about the #roadmap",
    "Deployment finished, thanks everyone #deployment #daily",
    "Found a bug in the login flow #bug #urgent",
)

MESSAGES_PER_CHANNEL = 50


class SlackConnector(SourceConnector):
    name = "slack"
    TOKEN_TTL = timedelta(hours=2)
    SCOPE = ["channels:read", "chat:write", "users:read"]

    def __init__(self, channels: Optional[List[str]] = None):
        self.channels = channels or ["general"]

    async def connect(self, auth_code: str) -> Credentials:
        if not auth_code:
            raise ConnectorError(self.name, "missing authorization code")

        return Credentials(
            access_token=f"slack_token_{secrets.token_hex(8)}",
            refresh_token=f"slack_refresh_{secrets.token_hex(8)}",
            expires_at=datetime.now(timezone.utc) + self.TOKEN_TTL,
            scope=list(self.SCOPE),
        )

    async def fetch(self, credentials: Credentials, **params: Any) -> List[RawRecord]:
        if credentials.is_expired():
            raise ConnectorError(self.name, "credentials expired")

        channels = params.get("channels") or self.channels
        now = datetime.now(timezone.utc)
        records: List[RawRecord] = []

        for channel in channels:
            for i in range(MESSAGES_PER_CHANNEL):
                records.append(
                    {
                        "id": f"slack_{channel}_{i}",
                        "channel": f"#{channel}",
                        "user": f"user{i % 7}",
                        "text": _MESSAGES[i % len(_MESSAGES)],
                        "timestamp": now - timedelta(seconds=30 * i),
                        "reactions": [],
                        "threadTs": f"thread_{i}" if i % 5 == 0 else None,
                    }
                )

        return records
