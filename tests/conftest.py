"""
Shared fixtures for the test suite.
"""
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from core.entities import DataItem
from services.cache import ResultCache
from services.data_processor import DataProcessingService

BASE_TIME = datetime(2024, 10, 1, 12, 0, tzinfo=timezone.utc)


def _item(id, title, content, source, channel, author, hours_ago, hashtags, category, priority, sentiment):
    return DataItem(
        id=id,
        title=title,
        content=content,
        source=source,
        channel=channel,
        author=author,
        timestamp=BASE_TIME - timedelta(hours=hours_ago),
        hashtags=tuple(hashtags),
        category=category,
        priority=priority,
        sentiment=sentiment,
    )


@pytest.fixture
def sample_items():
    """Eight items spread over the three sources."""
    return [
        _item(
            "1", "Q4 Marketing Strategy Meeting urgent",
            "Team meeting to discuss Q4 marketing strategy. Need to finalize budget allocation and timeline.",
            "slack", "#general", "Sarah Johnson", 2,
            ["#urgent", "#marketing", "#strategy", "#q4", "#budget"], "Business", "High", "neutral",
        ),
        _item(
            "2", "Product Roadmap Update meeting",
            "New features planned for next sprint: advanced analytics and mobile app enhancements.",
            "notion", "Product Docs", "Mike Chen", 4,
            ["#meeting", "#product", "#roadmap", "#features", "#ai"], "Product", "Medium", "neutral",
        ),
        _item(
            "3", "Client Meeting Follow-up followup",
            "Great discussion with ABC Corp about enterprise requirements and a technical demo next week.",
            "gmail", "Inbox", "john.doe@company.com", 6,
            ["#followup", "#client", "#enterprise", "#demo"], "Sales", "High", "positive",
        ),
        _item(
            "4", "Team Standup Notes daily",
            "Everyone making good progress. John needs help with API integration.",
            "slack", "#team-standup", "Alex Rodriguez", 8,
            ["#daily", "#team", "#collaboration", "#api", "#design"], "Team", "Medium", "positive",
        ),
        _item(
            "5", "Budget Approval Required urgent",
            "Need approval for Q4 marketing spend. Please review and approve by EOD.",
            "gmail", "Inbox", "finance@company.com", 12,
            ["#urgent", "#budget", "#approval", "#marketing"], "Finance", "High", "neutral",
        ),
        _item(
            "6", "Design System Updates design",
            "Updated design system with new components, color palette and dark mode support.",
            "notion", "Design Docs", "Emma Wilson", 16,
            ["#design", "#ui", "#components", "#darkmode"], "Design", "Low", "neutral",
        ),
        _item(
            "7", "API Documentation tech",
            "Updated API documentation with new endpoints and error handling guidelines.",
            "notion", "Tech Docs", "David Kim", 20,
            ["#tech", "#api", "#documentation"], "Technical", "Medium", "negative",
        ),
        _item(
            "8", "Customer Feedback Summary feedback",
            "Collected feedback from 50+ customers. Main themes: mobile experience and loading times.",
            "gmail", "Inbox", "support@company.com", 24,
            ["#feedback", "#customers", "#mobile", "#performance"], "Customer", "High", "neutral",
        ),
    ]


@pytest.fixture
def make_item():
    """Factory for one-off items; keyword overrides replace defaults."""
    counter = {"n": 0}

    def factory(**overrides):
        counter["n"] += 1
        base = _item(
            f"item-{counter['n']}", "Untitled", "", "gmail", None, "someone", 0,
            [], "Communication", "Low", "neutral",
        )
        if "hashtags" in overrides:
            overrides["hashtags"] = tuple(overrides["hashtags"])
        return replace(base, **overrides)

    return factory


@pytest.fixture
def processor():
    """Engine facade with an isolated cache."""
    return DataProcessingService(cache=ResultCache())
