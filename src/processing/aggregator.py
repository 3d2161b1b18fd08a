from typing import Dict, List, Sequence

from core.entities import DataItem, HashtagStat
from core.scoring import classify_trend, engagement_score


def aggregate_hashtag_stats(items: Sequence[DataItem]) -> List[HashtagStat]:
    """
    Per-hashtag counts, source coverage and trend labels, most frequent
    first. Ties keep the order in which tags were first encountered.
    """
    counts: Dict[str, int] = {}
    sources: Dict[str, Dict[str, None]] = {}
    priorities: Dict[str, Dict[str, None]] = {}

    for item in items:
        for hashtag in item.hashtags:
            if hashtag not in counts:
                counts[hashtag] = 0
                sources[hashtag] = {}
                priorities[hashtag] = {}
            counts[hashtag] += 1
            sources[hashtag][item.source] = None
            if item.priority:
                priorities[hashtag][item.priority] = None

    total = len(items)
    stats = [
        HashtagStat(
            hashtag=hashtag,
            count=count,
            sources=tuple(sources[hashtag]),
            trend=classify_trend(count, total),
            engagement=engagement_score(count, total),
            priorities=tuple(priorities[hashtag]),
        )
        for hashtag, count in counts.items()
    ]

    return sorted(stats, key=lambda stat: stat.count, reverse=True)
