"""
RankPilot — Activity vocabulary.

Every tool invocation is recorded as one activity whose ``type`` is one of
the seven normalized keys below, paired with a fixed display name.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActivityType(str, Enum):
    AUDIT = "audit"
    KEYWORD_RESEARCH = "keyword-research"
    SERP_ANALYSIS = "serp-analysis"
    COMPETITOR_ANALYSIS = "competitor-analysis"
    CONTENT_ANALYSIS = "content-analysis"
    CONTENT_BRIEF = "content-brief"
    LINK_ANALYSIS = "link-analysis"


TOOL_NAMES: dict[ActivityType, str] = {
    ActivityType.AUDIT: "SEO Audit",
    ActivityType.KEYWORD_RESEARCH: "Keyword Research",
    ActivityType.SERP_ANALYSIS: "SERP Analysis",
    ActivityType.COMPETITOR_ANALYSIS: "Competitor Analysis",
    ActivityType.CONTENT_ANALYSIS: "Content Analysis",
    ActivityType.CONTENT_BRIEF: "Content Brief",
    ActivityType.LINK_ANALYSIS: "Link Analysis",
}

# Display-name types written before normalization → current keys.
# Only the schema migration reads this; new writes always use ActivityType.
LEGACY_ACTIVITY_TYPE_MAP: dict[str, str] = {
    "SEO Audit": ActivityType.AUDIT.value,
    "Keyword Search": ActivityType.KEYWORD_RESEARCH.value,
    "SERP View": ActivityType.SERP_ANALYSIS.value,
    "Competitor Analysis": ActivityType.COMPETITOR_ANALYSIS.value,
    "Content Analysis": ActivityType.CONTENT_ANALYSIS.value,
    "Content Brief Generation": ActivityType.CONTENT_BRIEF.value,
    "Link Analysis": ActivityType.LINK_ANALYSIS.value,
}

NORMALIZED_TYPES = frozenset(t.value for t in ActivityType)


class _ServerTimestamp:
    """Placeholder for a timestamp the database assigns at write time."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class ActivityRecord:
    type: str
    tool: str
    details: dict[str, Any] = field(default_factory=dict)
    results_summary: str = ""
    timestamp: Any = SERVER_TIMESTAMP


def create_standard_activity(
    type: ActivityType,
    tool: str,
    details: dict[str, Any],
    results_summary: str,
) -> ActivityRecord:
    """Assemble an activity record. The timestamp stays SERVER_TIMESTAMP."""
    return ActivityRecord(
        type=type.value if isinstance(type, ActivityType) else type,
        tool=tool,
        details=dict(details),
        results_summary=results_summary,
    )


def is_normalized_type(value: str) -> bool:
    return value in NORMALIZED_TYPES
