from datetime import timezone

import pytest

from core.entities import Classification
from processing.classifier import (
    ItemClassifier,
    KeywordSentimentClassifier,
    SentimentClassifier,
    determine_category,
    determine_priority,
)


@pytest.fixture
def classifier():
    return ItemClassifier()


@pytest.mark.parametrize("source", ["gmail", "slack", "notion", "teams", None])
def test_high_priority_tag_wins_regardless_of_source(classifier, source):
    raw = {"title": "Everything is broken", "content": "terrible failed error problem"}

    labels = classifier.classify(raw, source, ["#urgent"])

    assert labels.priority == "High"


def test_priority_order():
    assert determine_priority(["#meeting", "#critical"]) == "High"
    assert determine_priority(["#deadline", "#misc"]) == "Medium"
    assert determine_priority(["#misc"]) == "Low"
    assert determine_priority([]) == "Low"


def test_meeting_tag_drives_category_and_priority(classifier):
    labels = classifier.classify({}, "slack", ["#meeting"])

    assert labels.category == "Business"
    assert labels.priority == "Medium"


def test_first_matching_category_rule_wins():
    assert determine_category(["#docs", "#budget"], "notion") == "Business"
    assert determine_category(["#api", "#feedback"], "gmail") == "Technical"


@pytest.mark.parametrize(
    "source, expected",
    [("gmail", "Communication"), ("slack", "Team"), ("notion", "Documentation"), ("teams", "General"), (None, "General")],
)
def test_category_falls_back_to_source_default(source, expected):
    assert determine_category(["#unmatched"], source) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Great progress this week", "positive"),
        ("The build failed with an error", "negative"),
        ("Great work, but the deploy is broken", "neutral"),
        ("", "neutral"),
        ("EXCELLENT", "positive"),
    ],
)
def test_keyword_sentiment(text, expected):
    assert KeywordSentimentClassifier().classify(text) == expected


def test_sentiment_reads_title_and_content(classifier):
    labels = classifier.classify({"subject": "Thanks!", "content": "Awesome job"}, "gmail", [])

    assert labels.sentiment == "positive"


def test_missing_fields_do_not_raise(classifier):
    assert classifier.classify({}, "gmail", []) == Classification(
        category="Communication", priority="Low", sentiment="neutral",
    )
    assert classifier.classify(None, None, []).category == "General"


def test_classify_is_deterministic(classifier):
    raw = {"subject": "Budget issue", "content": "Good news and bad news"}
    tags = ["#budget", "#followup"]

    results = {classifier.classify(raw, "gmail", tags) for _ in range(5)}

    assert len(results) == 1


def test_custom_sentiment_classifier_is_used():
    class AlwaysNegative(SentimentClassifier):
        def classify(self, text):
            return "negative"

    classifier = ItemClassifier(sentiment_classifier=AlwaysNegative())

    assert classifier.classify({"content": "great"}, "gmail", []).sentiment == "negative"


def test_custom_category_rules():
    classifier = ItemClassifier(category_rules=[("Ops", ["#oncall"])])

    assert classifier.classify({}, "slack", ["#oncall"]).category == "Ops"
    assert classifier.classify({}, "slack", ["#budget"]).category == "Team"


def test_build_item_extracts_and_labels(classifier):
    raw = {
        "id": "gmail_7",
        "subject": "Budget review",
        "content": "Please check #Budget and the #urgent items, thanks",
        "sender": "cfo@example.com",
        "labels": ["INBOX"],
        "timestamp": "2024-10-01T09:30:00Z",
    }

    item = classifier.build_item(raw, "gmail")

    assert item.id == "gmail_7"
    assert item.hashtags == ("#budget", "#urgent")
    assert item.category == "Business"
    assert item.priority == "High"
    assert item.sentiment == "positive"
    assert item.channel == "INBOX"
    assert item.author == "cfo@example.com"
    assert item.timestamp.tzinfo == timezone.utc
