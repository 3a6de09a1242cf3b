"""
Competitor ranking and content gap tool.
"""

from rankpilot.activity_types import ActivityType
from rankpilot.schemas.tools import CompetitorAnalysisInput, CompetitorAnalysisOutput
from rankpilot.tools import prompts
from rankpilot.tools.base import Tool


def _build_prompt(params: CompetitorAnalysisInput, context: dict) -> str:
    return prompts.competitor_analysis(params.your_url, params.competitor_urls, params.keywords)


def _describe(params: CompetitorAnalysisInput, output: CompetitorAnalysisOutput) -> dict:
    return {
        "yourUrl": params.your_url,
        "competitors": params.competitor_urls,
        "keywords": params.keywords,
    }


def _summarize(params: CompetitorAnalysisInput, output: CompetitorAnalysisOutput) -> str:
    return (
        f"Competitive analysis completed for {params.your_url} vs "
        f"{len(params.competitor_urls)} competitors; {len(output.content_gaps)} content gaps found."
    )


competitor_analysis = Tool(
    slug="competitor-analysis",
    activity_type=ActivityType.COMPETITOR_ANALYSIS,
    input_model=CompetitorAnalysisInput,
    output_model=CompetitorAnalysisOutput,
    system_prompt=prompts.COMPETITOR_SYSTEM,
    build_prompt=_build_prompt,
    describe=_describe,
    summarize=_summarize,
)
