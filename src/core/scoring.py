"""
Module to score hashtags and items
"""
from typing import Iterable

TITLE_WEIGHT = 3
CONTENT_WEIGHT = 2
HASHTAG_WEIGHT = 4


def share_percent(count: int, total: int) -> float:
    """
    Share of ``total`` represented by ``count``, as a percentage.
    An empty collection has a share of zero.
    """
    if total <= 0:
        return 0.0
    return count * 100 / total


def classify_trend(count: int, total: int) -> str:
    """
    Buckets a hashtag by its share of the collection. Bounds are
    exclusive and checked from the highest down.
    """
    pct = share_percent(count, total)
    if pct > 20:
        return "trending"
    if pct > 10:
        return "popular"
    if pct > 5:
        return "moderate"
    return "low"


def engagement_score(count: int, total: int) -> int:
    """
    Share percentage rounded half-up to the nearest integer.
    """
    return int(share_percent(count, total) + 0.5)


def text_relevance(
    *,
    title: str,
    content: str,
    hashtags: Iterable[str],
    query: str,
) -> int:
    """
    Weighted relevance of an item for a free-text query.
    """
    needle = query.lower()
    score = 0

    if needle in (title or "").lower():
        score += TITLE_WEIGHT

    if needle in (content or "").lower():
        score += CONTENT_WEIGHT

    if any(needle in tag.lower() for tag in hashtags):
        score += HASHTAG_WEIGHT

    return score
