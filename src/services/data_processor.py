"""
DataProcessingService - engine facade combining extraction, classification,
aggregation and filtering behind a ResultCache.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from core.entities import DataItem, HashtagStat, RawRecord
from core.schemas import FilterCriteria
from processing.aggregator import aggregate_hashtag_stats
from processing.classifier import ItemClassifier
from processing.extractor import extract_hashtags
from processing.filtering import filter_items, rank_items
from processing.normalizer import normalize_record
from services.cache import ResultCache, fingerprint

logger = logging.getLogger(__name__)

Criteria = Union[FilterCriteria, Mapping[str, Any], None]


def _coerce_criteria(criteria: Criteria) -> FilterCriteria:
    if criteria is None:
        return FilterCriteria()
    if isinstance(criteria, FilterCriteria):
        return criteria
    return FilterCriteria.model_validate(dict(criteria))


class DataProcessingService:
    """
    Cached engine operations. Construct one per owner and pass it around;
    tests can inject an isolated cache.
    """

    def __init__(
        self,
        cache: Optional[ResultCache] = None,
        classifier: Optional[ItemClassifier] = None,
    ):
        self.cache = cache if cache is not None else ResultCache()
        self.classifier = classifier or ItemClassifier()

    def extract_hashtags(self, text: Optional[str], source: Optional[str]) -> List[str]:
        key = f"hashtags_{source or 'none'}_{fingerprint(text or '')}"

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        hashtags = extract_hashtags(text, source)
        self.cache.set(key, hashtags)
        return hashtags

    def build_item(self, raw: Optional[RawRecord], source: str) -> DataItem:
        """Normalize and classify a raw connector record."""
        draft = normalize_record(raw, source)
        hashtags = self.extract_hashtags(draft.scan_text, source)
        return self.classifier.build_item(draft, source, hashtags)

    def build_items(self, records: Sequence[RawRecord], source: str) -> List[DataItem]:
        return [self.build_item(raw, source) for raw in records]

    def calculate_hashtag_stats(
        self,
        items: Sequence[DataItem],
        source_filter: Optional[str] = None,
    ) -> List[HashtagStat]:
        """
        Hashtag statistics, optionally restricted to one source's items.
        """
        if source_filter:
            source_filter = source_filter.lower()
            items = [item for item in items if item.source.lower() == source_filter]

        key = f"stats_{source_filter or 'all'}_{fingerprint(list(items))}"

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        stats = aggregate_hashtag_stats(items)
        self.cache.set(key, stats)
        logger.debug(f"Computed stats for {len(stats)} hashtags over {len(items)} items")
        return stats

    def filter_data(self, items: Sequence[DataItem], criteria: Criteria = None) -> List[DataItem]:
        criteria = _coerce_criteria(criteria)
        key = f"filter_{fingerprint(criteria)}_{fingerprint(list(items))}"

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        filtered = filter_items(items, criteria)
        self.cache.set(key, filtered)
        return filtered

    def rank_data(
        self,
        items: Sequence[DataItem],
        criteria: Criteria = None,
    ) -> List[Tuple[DataItem, int]]:
        """Matching items with their relevance scores, best first."""
        criteria = _coerce_criteria(criteria)
        key = f"rank_{fingerprint(criteria)}_{fingerprint(list(items))}"

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        ranked = rank_items(items, criteria)
        self.cache.set(key, ranked)
        return ranked

    def clear_cache(self, pattern: Optional[str] = None) -> int:
        return self.cache.clear(pattern)

    def get_cache_stats(self) -> Dict[str, Any]:
        return self.cache.stats()
