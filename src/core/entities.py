from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

RawRecord = Dict[str, Any]


@dataclass(frozen=True)
class DataItem:
    """
    Canonical representation of a classified content item.
    """
    id: str
    title: str
    content: str
    source: str
    author: str
    timestamp: datetime
    hashtags: Tuple[str, ...]
    category: str
    priority: str
    channel: Optional[str] = None
    sentiment: Optional[str] = None


@dataclass(frozen=True)
class HashtagStat:
    """
    Aggregated statistics for a single hashtag.
    """
    hashtag: str
    count: int
    sources: Tuple[str, ...]
    trend: str
    engagement: int
    priorities: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Classification:
    """
    Labels derived for a raw record.
    """
    category: str
    priority: str
    sentiment: str
