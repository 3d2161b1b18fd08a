import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from core.entities import DataItem
from core.schemas import DateRange, FilterCriteria
from core.scoring import text_relevance

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def relevance_score(item: DataItem, query: str) -> int:
    """Weighted query relevance; an empty query scores zero."""
    if not query:
        return 0
    return text_relevance(
        title=item.title,
        content=item.content,
        hashtags=item.hashtags,
        query=query,
    )


def in_date_range(timestamp: datetime, date_range: DateRange) -> bool:
    moment = _as_utc(timestamp)
    return _as_utc(date_range.start) <= moment <= _as_utc(date_range.end)


def _allowed(value: Optional[str], allowed: Iterable[str]) -> bool:
    allowed = list(allowed)
    return not allowed or value in allowed


def passes_criteria(item: DataItem, criteria: FilterCriteria) -> bool:
    """All supplied criteria must hold; empty ones never restrict."""
    if not _allowed(item.category, criteria.categories):
        return False

    if not _allowed(item.source, criteria.sources):
        return False

    if not _allowed(item.priority, criteria.priorities):
        return False

    if not _allowed(item.author, criteria.authors):
        return False

    if criteria.sentiment and item.sentiment != criteria.sentiment:
        return False

    if criteria.hashtags:
        wanted = {tag.lower() for tag in criteria.hashtags}
        if not wanted.intersection(item.hashtags):
            return False

    if criteria.date_range and not in_date_range(item.timestamp, criteria.date_range):
        return False

    if criteria.query and relevance_score(item, criteria.query) <= 0:
        return False

    return True


def filter_items(items: Sequence[DataItem], criteria: FilterCriteria) -> List[DataItem]:
    """
    Items satisfying ``criteria``, in their original order.
    """
    filtered = [item for item in items if passes_criteria(item, criteria)]
    logger.debug(f"Filter: {len(items)} -> {len(filtered)} items")
    return filtered


def rank_items(
    items: Sequence[DataItem],
    criteria: FilterCriteria,
) -> List[Tuple[DataItem, int]]:
    """
    Matching items paired with their query relevance, highest first.
    Equal scores keep their original order.
    """
    scored = [
        (item, relevance_score(item, criteria.query))
        for item in filter_items(items, criteria)
    ]
    return sorted(scored, key=lambda pair: pair[1], reverse=True)
