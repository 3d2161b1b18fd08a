"""
Mock Gmail connector producing synthetic mailbox messages
"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, List

from ingestion.base import ConnectorError, Credentials, RawRecord, SourceConnector

_MESSAGES = (
    ("Budget approval required", "Please review the Q4 #budget before EOD. #approval #urgent"),
    ("Client follow-up", "Great call with ABC Corp, they want a technical #demo. #followup #client"),
    ("Weekly sync agenda", "Agenda for Thursday's #meeting is attached. #important"),
    ("Invoice problem", "The latest invoice failed to process, please check. #finance"),
    ("Customer feedback summary", "Collected feedback from 50 customers. #feedback #customers"),
)


class GmailConnector(SourceConnector):
    name = "gmail"
    TOKEN_TTL = timedelta(hours=1)
    SCOPE = ["https://www.googleapis.com/auth/gmail.readonly"]

    def __init__(self, max_results: int = 100):
        self.max_results = max_results

    async def connect(self, auth_code: str) -> Credentials:
        if not auth_code:
            raise ConnectorError(self.name, "missing authorization code")

        return Credentials(
            access_token=f"gmail_token_{secrets.token_hex(8)}",
            refresh_token=f"gmail_refresh_{secrets.token_hex(8)}",
            expires_at=datetime.now(timezone.utc) + self.TOKEN_TTL,
            scope=list(self.SCOPE),
        )

    async def fetch(self, credentials: Credentials, **params: Any) -> List[RawRecord]:
        if credentials.is_expired():
            raise ConnectorError(self.name, "credentials expired")

        max_results = int(params.get("max_results", self.max_results))
        now = datetime.now(timezone.utc)
        records: List[RawRecord] = []

        for i in range(max_results):
            subject, body = _MESSAGES[i % len(_MESSAGES)]
            records.append(
                {
                    "id": f"gmail_{i}",
                    "subject": f"{subject} ({i})" if i else subject,
                    "sender": f"sender{i}@example.com",
                    "timestamp": now - timedelta(minutes=i),
                    "content": body,
                    "labels": ["INBOX", "IMPORTANT"] if i % 2 == 0 else ["INBOX"],
                    "threadId": f"thread_{i // 3}",
                }
            )

        return records
