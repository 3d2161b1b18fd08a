"""
Keyword tables driving classification.

A tag may appear in both a category rule and a priority list (for example
``#meeting``); it then drives both labels.
"""
from typing import Tuple

GENERAL_CATEGORY = "General"

CATEGORY_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Business", ("#budget", "#approval", "#strategy", "#marketing", "#meeting", "#q4")),
    ("Product", ("#product", "#roadmap", "#features", "#release")),
    ("Sales", ("#client", "#enterprise", "#demo", "#sales")),
    ("Team", ("#team", "#collaboration", "#daily", "#standup")),
    ("Design", ("#design", "#ui", "#components", "#darkmode")),
    ("Technical", ("#tech", "#api", "#bug", "#deployment")),
    ("Documentation", ("#docs", "#documentation", "#guide", "#template", "#reference")),
    ("Customer", ("#feedback", "#customers", "#support")),
)

HIGH_PRIORITY_TAGS: Tuple[str, ...] = ("#urgent", "#critical", "#asap", "#emergency")
MEDIUM_PRIORITY_TAGS: Tuple[str, ...] = ("#important", "#followup", "#meeting", "#deadline")

PRIORITY_HIGH = "High"
PRIORITY_MEDIUM = "Medium"
PRIORITY_LOW = "Low"

POSITIVE_WORDS: Tuple[str, ...] = (
    "great",
    "excellent",
    "good",
    "awesome",
    "amazing",
    "success",
    "happy",
    "thanks",
    "progress",
    "love",
)

NEGATIVE_WORDS: Tuple[str, ...] = (
    "bad",
    "terrible",
    "issue",
    "problem",
    "failed",
    "error",
    "broken",
    "delay",
    "blocked",
    "concern",
)
