"""
SERP simulation tool — ten organic results plus four "people also ask" questions.
"""

from rankpilot.activity_types import ActivityType
from rankpilot.schemas.tools import SerpViewInput, SerpViewOutput
from rankpilot.tools import prompts
from rankpilot.tools.base import Tool


def _build_prompt(params: SerpViewInput, context: dict) -> str:
    return prompts.serp_view(params.keyword)


def _describe(params: SerpViewInput, output: SerpViewOutput) -> dict:
    return {
        "keyword": params.keyword,
        "topResult": output.organic_results[0].url,
    }


def _summarize(params: SerpViewInput, output: SerpViewOutput) -> str:
    return f'Simulated SERP for "{params.keyword}" with {len(output.organic_results)} organic results.'


serp_view = Tool(
    slug="serp-view",
    activity_type=ActivityType.SERP_ANALYSIS,
    input_model=SerpViewInput,
    output_model=SerpViewOutput,
    system_prompt=prompts.SERP_SYSTEM,
    build_prompt=_build_prompt,
    describe=_describe,
    summarize=_summarize,
    temperature=0.5,
)
