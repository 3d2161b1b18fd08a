"""
ResultCache - memoizes extraction, aggregation and filtering results.
Keys carry a content fingerprint of the inputs, so two inputs only share
an entry when their serialized form is identical.
"""
import hashlib
import json
import logging
from collections import OrderedDict
from dataclasses import asdict, is_dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

FINGERPRINT_LENGTH = 16


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return str(value)


def fingerprint(value: Any) -> str:
    """
    Short SHA-256 digest of the canonical JSON form of ``value``.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, (list, tuple)):
        value = [asdict(v) if is_dataclass(v) and not isinstance(v, type) else v for v in value]

    payload = json.dumps(value, sort_keys=True, default=_json_default, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


def _copy(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return value


class ResultCache:
    """
    In-process key/value cache. Unbounded unless ``max_entries`` is set,
    in which case the least recently used entry is evicted first.
    Entries never expire on their own.
    """

    def __init__(self, max_entries: Optional[int] = None):
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be a positive integer")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, Any]" = OrderedDict()

    def get(self, key: str) -> Optional[Any]:
        if key not in self._entries:
            logger.debug(f"Cache miss: {key}")
            return None

        self._entries.move_to_end(key)
        logger.debug(f"Cache hit: {key}")
        return _copy(self._entries[key])

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = _copy(value)
        self._entries.move_to_end(key)

        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Cache evicted: {evicted}")

    def clear(self, pattern: Optional[str] = None) -> int:
        """
        Remove every entry, or only those whose key contains ``pattern``.

        Returns:
            Number of entries removed
        """
        if not pattern:
            removed = len(self._entries)
            self._entries.clear()
        else:
            doomed = [key for key in self._entries if pattern in key]
            for key in doomed:
                del self._entries[key]
            removed = len(doomed)

        logger.debug(f"Cache cleared {removed} entries (pattern={pattern!r})")
        return removed

    def stats(self) -> Dict[str, Any]:
        keys: List[str] = list(self._entries.keys())
        return {"size": len(keys), "keys": keys}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
