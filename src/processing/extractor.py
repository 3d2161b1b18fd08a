import re
from typing import List, Optional

from core.sources import get_source_profile

HASHTAG_PATTERN = re.compile(r"#\w+", re.ASCII)


def find_hashtags(text: Optional[str]) -> List[str]:
    """
    Lowercased hashtags in first-occurrence order, without duplicates.
    """
    if not text:
        return []

    seen = set()
    tags: List[str] = []
    for match in HASHTAG_PATTERN.findall(text):
        tag = match.lower()
        if tag in seen:
            continue
        seen.add(tag)
        tags.append(tag)

    return tags


def extract_hashtags(text: Optional[str], source: Optional[str]) -> List[str]:
    """
    Extracts hashtags and moves the source's priority tags to the front.
    Both groups keep their original relative order. Unknown sources get
    the deduplicated list as is.
    """
    tags = find_hashtags(text)

    profile = get_source_profile(source)
    if profile is None:
        return tags

    promoted = [tag for tag in tags if tag in profile.priority_tags]
    others = [tag for tag in tags if tag not in profile.priority_tags]
    return promoted + others
