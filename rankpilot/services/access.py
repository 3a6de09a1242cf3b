"""
RankPilot — Subscription tier gate.
Decides which tools a subscription tier may run.
"""

from enum import Enum

from rankpilot.activity_types import ActivityType


class SubscriptionTier(str, Enum):
    FREE = "free"
    STARTER = "starter"
    AGENCY = "agency"
    ENTERPRISE = "enterprise"
    ADMIN = "admin"


# Lowest tier first
TIER_ORDER = [
    SubscriptionTier.FREE,
    SubscriptionTier.STARTER,
    SubscriptionTier.AGENCY,
    SubscriptionTier.ENTERPRISE,
    SubscriptionTier.ADMIN,
]

_FREE_TOOLS = frozenset({
    ActivityType.AUDIT,
    ActivityType.KEYWORD_RESEARCH,
    ActivityType.SERP_ANALYSIS,
})

_ALL_TOOLS = frozenset(ActivityType)

TIER_TOOL_ACCESS: dict[SubscriptionTier, frozenset[ActivityType]] = {
    SubscriptionTier.FREE: _FREE_TOOLS,
    SubscriptionTier.STARTER: _ALL_TOOLS,
    SubscriptionTier.AGENCY: _ALL_TOOLS,
    SubscriptionTier.ENTERPRISE: _ALL_TOOLS,
    SubscriptionTier.ADMIN: _ALL_TOOLS,
}


def resolve_tier(raw: str | None) -> SubscriptionTier:
    """Map a stored tier string to a tier; anything unknown is treated as free."""
    try:
        return SubscriptionTier((raw or "").strip().lower())
    except ValueError:
        return SubscriptionTier.FREE


def can_access_tool(tier: SubscriptionTier, activity_type: ActivityType) -> bool:
    return activity_type in TIER_TOOL_ACCESS.get(tier, frozenset())


def required_tier(activity_type: ActivityType) -> SubscriptionTier:
    for tier in TIER_ORDER:
        if activity_type in TIER_TOOL_ACCESS[tier]:
            return tier
    return SubscriptionTier.ADMIN


def is_admin(tier: SubscriptionTier) -> bool:
    return tier == SubscriptionTier.ADMIN
