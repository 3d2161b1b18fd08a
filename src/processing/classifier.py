"""
Derives category, priority and sentiment labels for ingested records
"""
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence, Tuple, Union

from core.entities import Classification, DataItem
from core.sources import get_source_profile
from core.taxonomy import (
    CATEGORY_RULES,
    GENERAL_CATEGORY,
    HIGH_PRIORITY_TAGS,
    MEDIUM_PRIORITY_TAGS,
    NEGATIVE_WORDS,
    POSITIVE_WORDS,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
)
from processing.extractor import extract_hashtags
from processing.normalizer import RawRecord, RecordDraft, normalize_record

CategoryRules = Sequence[Tuple[str, Sequence[str]]]


class SentimentClassifier(ABC):
    """
    Base interface for sentiment labelling.
    """

    @abstractmethod
    def classify(self, text: str) -> str:
        """
        Return "positive", "negative" or "neutral".
        Must NEVER raise.
        """
        raise NotImplementedError


class KeywordSentimentClassifier(SentimentClassifier):
    """Counts which listed words occur in the text; the larger side wins."""

    def __init__(
        self,
        positive_words: Iterable[str] = POSITIVE_WORDS,
        negative_words: Iterable[str] = NEGATIVE_WORDS,
    ):
        self.positive_words = tuple(w.lower() for w in positive_words)
        self.negative_words = tuple(w.lower() for w in negative_words)

    def classify(self, text: str) -> str:
        text = (text or "").lower()
        positive = sum(1 for word in self.positive_words if word in text)
        negative = sum(1 for word in self.negative_words if word in text)

        if positive > negative:
            return "positive"
        if negative > positive:
            return "negative"
        return "neutral"


def determine_category(
    hashtags: Iterable[str],
    source: Optional[str],
    rules: CategoryRules = CATEGORY_RULES,
) -> str:
    tags = set(hashtags)
    for category, keywords in rules:
        if tags.intersection(keywords):
            return category

    profile = get_source_profile(source)
    if profile is not None:
        return profile.default_category
    return GENERAL_CATEGORY


def determine_priority(hashtags: Iterable[str]) -> str:
    tags = set(hashtags)
    if tags.intersection(HIGH_PRIORITY_TAGS):
        return PRIORITY_HIGH
    if tags.intersection(MEDIUM_PRIORITY_TAGS):
        return PRIORITY_MEDIUM
    return PRIORITY_LOW


class ItemClassifier:
    """
    Labels records from their hashtags, source and text.
    """

    def __init__(
        self,
        sentiment_classifier: Optional[SentimentClassifier] = None,
        category_rules: Optional[CategoryRules] = None,
    ):
        self.sentiment_classifier = sentiment_classifier or KeywordSentimentClassifier()
        self.category_rules = category_rules if category_rules is not None else CATEGORY_RULES

    def classify(
        self,
        raw: Union[RawRecord, RecordDraft, None],
        source: Optional[str],
        hashtags: Sequence[str],
    ) -> Classification:
        draft = raw if isinstance(raw, RecordDraft) else normalize_record(raw, source)
        text = f"{draft.title} {draft.content}"

        return Classification(
            category=determine_category(hashtags, source, self.category_rules),
            priority=determine_priority(hashtags),
            sentiment=self.sentiment_classifier.classify(text),
        )

    def build_item(
        self,
        raw: Union[RawRecord, RecordDraft, None],
        source: str,
        hashtags: Optional[Sequence[str]] = None,
    ) -> DataItem:
        """
        Normalize, tag and classify a raw record into a DataItem.
        ``hashtags`` may be supplied by a caching extractor.
        """
        draft = raw if isinstance(raw, RecordDraft) else normalize_record(raw, source)
        if hashtags is None:
            hashtags = extract_hashtags(draft.scan_text, source)

        labels = self.classify(draft, source, hashtags)

        return DataItem(
            id=draft.id,
            title=draft.title,
            content=draft.content,
            source=source,
            author=draft.author,
            timestamp=draft.timestamp,
            hashtags=tuple(hashtags),
            category=labels.category,
            priority=labels.priority,
            channel=draft.channel,
            sentiment=labels.sentiment,
        )
