"""
Content optimization tool. The content body itself is never stored in the activity.
"""

from rankpilot.activity_types import ActivityType
from rankpilot.schemas.tools import ContentOptimizationInput, ContentOptimizationOutput
from rankpilot.tools import prompts
from rankpilot.tools.base import Tool


def _build_prompt(params: ContentOptimizationInput, context: dict) -> str:
    return prompts.content_optimizer(params.content, params.keyword_list)


def _describe(params: ContentOptimizationInput, output: ContentOptimizationOutput) -> dict:
    return {
        "targetKeywords": params.keyword_list,
        "wordCount": len(params.content.split()),
        "overallScore": output.overall_score,
    }


def _summarize(params: ContentOptimizationInput, output: ContentOptimizationOutput) -> str:
    return f"Content scored {output.overall_score:g}/100 for {', '.join(params.keyword_list)}."


content_optimizer = Tool(
    slug="content-optimizer",
    activity_type=ActivityType.CONTENT_ANALYSIS,
    input_model=ContentOptimizationInput,
    output_model=ContentOptimizationOutput,
    system_prompt=prompts.CONTENT_OPTIMIZER_SYSTEM,
    build_prompt=_build_prompt,
    describe=_describe,
    summarize=_summarize,
    temperature=0.3,
)
