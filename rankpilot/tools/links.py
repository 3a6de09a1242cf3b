"""
Backlink profile analysis tool.
"""

from rankpilot.activity_types import ActivityType
from rankpilot.schemas.tools import LinkAnalysisInput, LinkAnalysisOutput
from rankpilot.tools import prompts
from rankpilot.tools.base import Tool


def _build_prompt(params: LinkAnalysisInput, context: dict) -> str:
    return prompts.link_analysis(params.url)


def _describe(params: LinkAnalysisInput, output: LinkAnalysisOutput) -> dict:
    return {
        "url": params.url,
        "totalBacklinks": output.summary.total_backlinks,
        "referringDomains": output.summary.referring_domains,
    }


def _summarize(params: LinkAnalysisInput, output: LinkAnalysisOutput) -> str:
    return (
        f"Found {output.summary.total_backlinks} backlinks from "
        f"{output.summary.referring_domains} domains for {params.url}."
    )


link_analysis = Tool(
    slug="link-analysis",
    activity_type=ActivityType.LINK_ANALYSIS,
    input_model=LinkAnalysisInput,
    output_model=LinkAnalysisOutput,
    system_prompt=prompts.LINK_SYSTEM,
    build_prompt=_build_prompt,
    describe=_describe,
    summarize=_summarize,
    temperature=0.6,
)
