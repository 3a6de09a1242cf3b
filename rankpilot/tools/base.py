"""
RankPilot — AI tool invoker.

Every tool follows the same shape: validate the input, send one prompt to
the engine, parse the reply into the tool's output schema. Invalid input
never reaches the engine; unusable output is an error, not an empty result.
"""

import logging
from typing import Any, Awaitable, Callable, Protocol

from pydantic import BaseModel, ValidationError

from rankpilot.activity_types import (
    ActivityRecord,
    ActivityType,
    TOOL_NAMES,
    create_standard_activity,
)
from rankpilot.errors import ToolOutputError, ToolValidationError
from rankpilot.services.ai import extract_json

logger = logging.getLogger(__name__)


class PromptEngine(Protocol):
    async def complete(
        self,
        messages: list[dict],
        temperature: float = ...,
        max_tokens: int | None = ...,
        model: str | None = ...,
        retries: int = ...,
    ) -> str: ...


def format_validation_error(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "input"
        parts.append(f"{loc}: {e.get('msg', 'invalid value')}")
    return "; ".join(parts)


class Tool:
    """One AI-backed SEO tool."""

    def __init__(
        self,
        slug: str,
        activity_type: ActivityType,
        input_model: type[BaseModel],
        output_model: type[BaseModel],
        system_prompt: str,
        build_prompt: Callable[[Any, dict], str],
        describe: Callable[[Any, Any], dict],
        summarize: Callable[[Any, Any], str],
        *,
        temperature: float = 0.4,
        prepare: Callable[[Any], Awaitable[dict]] | None = None,
    ):
        self.slug = slug
        self.activity_type = activity_type
        self.input_model = input_model
        self.output_model = output_model
        self.system_prompt = system_prompt
        self.build_prompt = build_prompt
        self.describe = describe
        self.summarize = summarize
        self.temperature = temperature
        self.prepare = prepare

    @property
    def name(self) -> str:
        return TOOL_NAMES[self.activity_type]

    def parse_input(self, payload: Any) -> BaseModel:
        """Validate raw input. Raises ToolValidationError."""
        if isinstance(payload, self.input_model):
            return payload
        if not isinstance(payload, dict):
            raise ToolValidationError(self.slug, f"{self.name} input must be a JSON object")
        try:
            return self.input_model.model_validate(payload)
        except ValidationError as err:
            raise ToolValidationError(self.slug, format_validation_error(err)) from err

    async def invoke(self, engine: PromptEngine, params: BaseModel) -> BaseModel:
        """Run the prompt once against ``engine``. Engine errors propagate as-is."""
        context = await self.prepare(params) if self.prepare else {}
        messages = [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.build_prompt(params, context)},
        ]
        raw = await engine.complete(messages, temperature=self.temperature, retries=0)
        return self.parse_output(raw)

    async def run(self, engine: PromptEngine, payload: Any) -> BaseModel:
        return await self.invoke(engine, self.parse_input(payload))

    def parse_output(self, raw: str | None) -> BaseModel:
        if not raw:
            logger.warning("%s: engine returned an empty response", self.slug)
            raise ToolOutputError(f"AI did not return valid data for {self.name}.")
        try:
            return self.output_model.model_validate(extract_json(raw))
        except (ValueError, ValidationError) as err:
            logger.warning("%s: output rejected — %s", self.slug, err)
            raise ToolOutputError(f"AI did not return valid data for {self.name}.") from err

    def activity_for(self, params: BaseModel, output: BaseModel) -> ActivityRecord:
        return create_standard_activity(
            self.activity_type,
            self.name,
            self.describe(params, output),
            self.summarize(params, output),
        )

    def __repr__(self):
        return f"<Tool {self.slug} ({self.activity_type.value})>"
