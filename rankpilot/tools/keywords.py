"""
Keyword suggestion tool.
"""

from rankpilot.activity_types import ActivityType
from rankpilot.schemas.tools import KeywordSuggestionInput, KeywordSuggestionOutput
from rankpilot.tools import prompts
from rankpilot.tools.base import Tool


def _build_prompt(params: KeywordSuggestionInput, context: dict) -> str:
    return prompts.keyword_suggestions(params.topic, params.include_long_tail_keywords)


def _describe(params: KeywordSuggestionInput, output: KeywordSuggestionOutput) -> dict:
    return {
        "topic": params.topic,
        "includeLongTailKeywords": params.include_long_tail_keywords,
        "keywordCount": len(output.keywords),
    }


def _summarize(params: KeywordSuggestionInput, output: KeywordSuggestionOutput) -> str:
    return f'Found {len(output.keywords)} keywords for "{params.topic}".'


keyword_suggestions = Tool(
    slug="keyword-suggestions",
    activity_type=ActivityType.KEYWORD_RESEARCH,
    input_model=KeywordSuggestionInput,
    output_model=KeywordSuggestionOutput,
    system_prompt=prompts.KEYWORD_SYSTEM,
    build_prompt=_build_prompt,
    describe=_describe,
    summarize=_summarize,
    temperature=0.7,
)
