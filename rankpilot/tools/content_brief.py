"""
Content brief tool.
"""

from rankpilot.activity_types import ActivityType
from rankpilot.schemas.tools import ContentBriefInput, ContentBriefOutput
from rankpilot.tools import prompts
from rankpilot.tools.base import Tool


def _build_prompt(params: ContentBriefInput, context: dict) -> str:
    return prompts.content_brief(params.keyword)


def _describe(params: ContentBriefInput, output: ContentBriefOutput) -> dict:
    return {"keyword": params.keyword, "title": output.title}


def _summarize(params: ContentBriefInput, output: ContentBriefOutput) -> str:
    return f'Generated content brief for keyword: "{params.keyword}".'


content_brief = Tool(
    slug="content-brief",
    activity_type=ActivityType.CONTENT_BRIEF,
    input_model=ContentBriefInput,
    output_model=ContentBriefOutput,
    system_prompt=prompts.CONTENT_BRIEF_SYSTEM,
    build_prompt=_build_prompt,
    describe=_describe,
    summarize=_summarize,
    temperature=0.6,
)
