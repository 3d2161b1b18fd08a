import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from ingestion.base import ConnectorError, Credentials, SourceConnector
from ingestion.gmail import GmailConnector
from ingestion.integration import ServiceIntegration
from ingestion.notion import NotionConnector
from ingestion.slack import SlackConnector


class BrokenConnector(SourceConnector):
    name = "slack"

    async def connect(self, auth_code):
        return Credentials(
            access_token="t",
            expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
        )

    async def fetch(self, credentials, **params):
        raise RuntimeError("rate limit exceeded")


class FlakyConnector(BrokenConnector):
    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    async def fetch(self, credentials, **params):
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError("connection reset")
        return [{"id": "s1", "text": "#team sync"}]


class SlowConnector(BrokenConnector):
    async def fetch(self, credentials, **params):
        await asyncio.sleep(1)
        return []


@pytest.fixture
def integration():
    return ServiceIntegration([GmailConnector(max_results=5), SlackConnector(), NotionConnector()])


@pytest.mark.asyncio
async def test_connect_and_status(integration):
    assert integration.status("gmail") == "disconnected"

    credentials = await integration.connect("gmail", "code-123")

    assert credentials.access_token.startswith("gmail_token_")
    assert credentials.scope == ["https://www.googleapis.com/auth/gmail.readonly"]
    assert integration.status("gmail") == "connected"
    assert integration.connected_sources() == ["gmail"]


@pytest.mark.asyncio
async def test_token_lifetimes_differ_per_source(integration):
    gmail = await integration.connect("gmail", "a")
    notion = await integration.connect("notion", "b")

    assert notion.expires_at - gmail.expires_at > timedelta(hours=22)


def test_expired_credentials_report_error(integration):
    integration.credentials["slack"] = Credentials(
        access_token="old",
        expires_at=datetime.now(timezone.utc) - timedelta(seconds=1),
    )

    assert integration.status("slack") == "error"


@pytest.mark.asyncio
async def test_status_accepts_naive_now(integration):
    await integration.connect("gmail", "code")

    assert integration.status("gmail", now=datetime.utcnow()) == "connected"
    assert integration.status("gmail", now=datetime.utcnow() + timedelta(hours=2)) == "error"


@pytest.mark.asyncio
async def test_disconnect(integration):
    await integration.connect("notion", "code")
    integration.disconnect("notion")

    assert integration.status("notion") == "disconnected"
    assert integration.connected_sources() == []


@pytest.mark.asyncio
async def test_connect_without_code_fails(integration):
    with pytest.raises(ConnectorError):
        await integration.connect("slack", "")


@pytest.mark.asyncio
async def test_unknown_source_is_rejected(integration):
    with pytest.raises(KeyError):
        await integration.connect("teams", "code")


@pytest.mark.asyncio
async def test_fetch_requires_connection(integration):
    with pytest.raises(ConnectorError):
        await integration.fetch("gmail")


@pytest.mark.asyncio
async def test_fetch_with_expired_credentials_fails(integration):
    expired = Credentials(access_token="x", expires_at=datetime.now(timezone.utc) - timedelta(minutes=1))

    with pytest.raises(ConnectorError):
        await integration.fetch("gmail", expired)


@pytest.mark.asyncio
async def test_fetch_shapes(integration):
    gmail = await integration.fetch("gmail", await integration.connect("gmail", "a"))
    slack = await integration.fetch("slack", await integration.connect("slack", "b"), channels=["general", "team"])
    notion = await integration.fetch("notion", await integration.connect("notion", "c"), database_id="wiki")

    assert len(gmail) == 5
    assert {"subject", "sender", "labels", "timestamp"} <= set(gmail[0])
    assert len(slack) == 100
    assert {r["channel"] for r in slack} == {"#general", "#team"}
    assert len(notion) == 75
    assert notion[0]["database"] == "wiki"


@pytest.mark.asyncio
async def test_sync_all_isolates_failures():
    integration = ServiceIntegration([GmailConnector(max_results=3), BrokenConnector()])
    await integration.connect("gmail", "a")
    await integration.connect("slack", "b")

    result = await integration.sync_all()

    assert len(result.records["gmail"]) == 3
    assert result.records["slack"] == []
    assert "rate limit exceeded" in result.errors["slack"]
    assert result.total == 3


@pytest.mark.asyncio
async def test_sync_all_without_connections(integration):
    result = await integration.sync_all()

    assert result.records == {}
    assert result.errors == {}


@pytest.mark.asyncio
async def test_fetch_retries_unexpected_errors():
    connector = FlakyConnector(failures=2)
    connector.retries = 3
    integration = ServiceIntegration([connector])
    await integration.connect("slack", "code")

    records = await integration.fetch("slack")

    assert records == [{"id": "s1", "text": "#team sync"}]
    assert connector.calls == 3


@pytest.mark.asyncio
async def test_fetch_gives_up_after_last_attempt():
    connector = FlakyConnector(failures=5)
    connector.retries = 2
    integration = ServiceIntegration([connector])
    await integration.connect("slack", "code")

    with pytest.raises(ConnectorError, match="connection reset"):
        await integration.fetch("slack")
    assert connector.calls == 2


@pytest.mark.asyncio
async def test_fetch_times_out():
    connector = SlowConnector()
    connector.timeout = 0.01
    integration = ServiceIntegration([connector])
    await integration.connect("slack", "code")

    with pytest.raises(ConnectorError, match="timed out"):
        await integration.fetch("slack")


@pytest.mark.asyncio
async def test_connector_errors_are_not_retried(integration):
    integration.connectors["gmail"].retries = 3
    expired = Credentials(access_token="x", expires_at=datetime.now(timezone.utc) - timedelta(minutes=1))

    with pytest.raises(ConnectorError, match="credentials expired"):
        await integration.fetch("gmail", expired)
