from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class SourceProfile:
    """
    Declarative source definition.
    """
    name: str
    kind: str
    priority_tags: Tuple[str, ...]
    default_category: str


GMAIL = SourceProfile(
    name="gmail",
    kind="email",
    priority_tags=("#urgent", "#followup", "#meeting", "#budget", "#approval"),
    default_category="Communication",
)

SLACK = SourceProfile(
    name="slack",
    kind="chat",
    priority_tags=("#team", "#collaboration", "#daily", "#standup", "#help"),
    default_category="Team",
)

NOTION = SourceProfile(
    name="notion",
    kind="document",
    priority_tags=("#docs", "#documentation", "#guide", "#template", "#reference"),
    default_category="Documentation",
)


ALL_SOURCES = {
    GMAIL.name: GMAIL,
    SLACK.name: SLACK,
    NOTION.name: NOTION,
}


def get_source_profile(source: Optional[str]) -> Optional[SourceProfile]:
    if not source:
        return None
    return ALL_SOURCES.get(source.lower())
