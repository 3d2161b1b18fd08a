"""
Maps source-specific raw records onto a common draft shape.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from core.entities import RawRecord
from core.sources import get_source_profile

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"
UNKNOWN_AUTHOR = "unknown"
SLACK_TITLE_LENGTH = 80


@dataclass(frozen=True)
class RecordDraft:
    """
    Source-independent view of a raw record, ready for classification.
    """
    id: str
    title: str
    content: str
    author: str
    channel: Optional[str]
    timestamp: datetime
    tag_text: str = ""

    @property
    def scan_text(self) -> str:
        """Text searched for hashtags."""
        return " ".join(part for part in (self.title, self.content, self.tag_text) if part)


def _text(raw: RawRecord, *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return ""


def parse_timestamp(value: Any) -> datetime:
    """
    Accepts datetimes, ISO-8601 strings and epoch seconds. Naive values
    are taken as UTC; anything unparseable becomes the current time.
    """
    parsed: Optional[datetime] = None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            parsed = None
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            parsed = None

    if parsed is None:
        if value is not None:
            logger.debug(f"Unparseable timestamp {value!r}, using current time")
        return datetime.now(timezone.utc)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _record_id(raw: RawRecord) -> str:
    value = raw.get("id")
    if value is None or str(value).strip() == "":
        return uuid.uuid4().hex
    return str(value)


def _normalize_email(raw: RawRecord) -> RecordDraft:
    labels = raw.get("labels") or []
    channel = str(labels[0]) if isinstance(labels, (list, tuple)) and labels else None
    return RecordDraft(
        id=_record_id(raw),
        title=_text(raw, "subject", "title") or UNTITLED,
        content=_text(raw, "content", "body", "snippet"),
        author=_text(raw, "sender", "from", "author") or UNKNOWN_AUTHOR,
        channel=channel or _text(raw, "channel") or None,
        timestamp=parse_timestamp(raw.get("timestamp")),
    )


def _normalize_chat(raw: RawRecord) -> RecordDraft:
    text = _text(raw, "text", "content")
    first_line = text.splitlines()[0].strip() if text else ""
    return RecordDraft(
        id=_record_id(raw),
        title=_text(raw, "title") or first_line[:SLACK_TITLE_LENGTH] or UNTITLED,
        content=text,
        author=_text(raw, "user", "author") or UNKNOWN_AUTHOR,
        channel=_text(raw, "channel") or None,
        timestamp=parse_timestamp(raw.get("timestamp")),
    )


def _normalize_document(raw: RawRecord) -> RecordDraft:
    tags = raw.get("tags") or []
    if isinstance(tags, str):
        tags = [tags]
    return RecordDraft(
        id=_record_id(raw),
        title=_text(raw, "title", "subject") or UNTITLED,
        content=_text(raw, "content", "text"),
        author=_text(raw, "author", "created_by") or UNKNOWN_AUTHOR,
        channel=_text(raw, "database", "channel") or None,
        timestamp=parse_timestamp(raw.get("lastEdited", raw.get("timestamp"))),
        tag_text=" ".join(str(tag) for tag in tags),
    )


def _normalize_generic(raw: RawRecord) -> RecordDraft:
    return RecordDraft(
        id=_record_id(raw),
        title=_text(raw, "title", "subject", "text") or UNTITLED,
        content=_text(raw, "content", "text", "body"),
        author=_text(raw, "author", "sender", "user") or UNKNOWN_AUTHOR,
        channel=_text(raw, "channel") or None,
        timestamp=parse_timestamp(raw.get("timestamp")),
    )


_NORMALIZERS: Dict[str, Callable[[RawRecord], RecordDraft]] = {
    "email": _normalize_email,
    "chat": _normalize_chat,
    "document": _normalize_document,
}


def normalize_record(raw: Optional[RawRecord], source: Optional[str]) -> RecordDraft:
    """
    Build a draft from a raw connector record, mapped by the source's
    kind. Missing fields fall back to empty strings or placeholders; this
    never raises for dict input.
    """
    profile = get_source_profile(source)
    kind = profile.kind if profile else None
    normalizer = _NORMALIZERS.get(kind, _normalize_generic)
    return normalizer(raw or {})
