"""
RankPilot AI tools, keyed by the slug used in ``POST /tools/{slug}``.
"""

from rankpilot.tools.base import Tool
from rankpilot.tools.audit import seo_audit
from rankpilot.tools.competitors import competitor_analysis
from rankpilot.tools.content_brief import content_brief
from rankpilot.tools.content_optimizer import content_optimizer
from rankpilot.tools.keywords import keyword_suggestions
from rankpilot.tools.links import link_analysis
from rankpilot.tools.serp import serp_view

TOOL_REGISTRY: dict[str, Tool] = {
    tool.slug: tool
    for tool in (
        keyword_suggestions,
        content_brief,
        serp_view,
        seo_audit,
        link_analysis,
        content_optimizer,
        competitor_analysis,
    )
}


def get_tool(slug: str) -> Tool | None:
    return TOOL_REGISTRY.get(slug)
