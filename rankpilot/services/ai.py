"""
RankPilot — AI API client.
Multi-provider: OpenAI-compatible endpoints and Anthropic (Claude).
Async with optional retry, JSON extraction.
"""

import json
import re
import asyncio
import logging

import aiohttp

from rankpilot.config import Settings
from rankpilot.errors import AIConfigurationError

logger = logging.getLogger(__name__)

# Anthropic API version header
ANTHROPIC_VERSION = "2023-06-01"


class AIClient:
    """Chat completion client bound to one provider configuration."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.timeout = aiohttp.ClientTimeout(total=settings.ai_timeout_secs)

    async def complete(
        self,
        messages: list[dict],
        temperature: float = 0.7,
        max_tokens: int | None = None,
        model: str | None = None,
        retries: int = 0,
    ) -> str:
        """Call the chat completion API.

        ``retries`` extra attempts are made on failure, with a longer wait
        when the provider reports rate limiting.
        """
        token = self.settings.ai_auth_token
        if not token:
            if self.settings.ai_provider == "anthropic":
                raise AIConfigurationError("ANTHROPIC_API_KEY not set — cannot call Claude API")
            raise AIConfigurationError("OPENAI_API_KEY not set — cannot call AI API")

        used_model = model or self.settings.ai_effective_model
        used_max_tokens = max_tokens or self.settings.ai_max_tokens
        last_err: Exception | None = None

        for attempt in range(1, retries + 2):
            try:
                return await self._request(messages, temperature, used_max_tokens, used_model, token)
            except Exception as err:
                last_err = err
                if attempt <= retries:
                    wait = retry_delay(str(err), attempt)
                    logger.warning("AI retry %d/%d — waiting %ds...", attempt, retries, wait)
                    await asyncio.sleep(wait)

        raise last_err  # type: ignore[misc]

    async def _request(
        self,
        messages: list[dict],
        temperature: float,
        max_tokens: int,
        model: str,
        token: str,
    ) -> str:
        """Dispatch to the correct provider."""
        if self.settings.ai_provider == "anthropic":
            return await self._request_anthropic(messages, temperature, max_tokens, model, token)
        return await self._request_openai(messages, temperature, max_tokens, model, token)

    async def _post(self, label: str, payload: dict, headers: dict) -> dict:
        """POST ``payload`` to the provider endpoint and decode the JSON reply."""
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(
                self.settings.ai_effective_url,
                json=payload,
                headers={**headers, "Content-Type": "application/json"},
            ) as resp:
                body = await resp.text()
                if resp.status != 200:
                    raise RuntimeError(f"{label} HTTP {resp.status}: {body[:500]}")
                return json.loads(body)

    async def _request_openai(
        self,
        messages: list[dict],
        temperature: float,
        max_tokens: int,
        model: str,
        token: str,
    ) -> str:
        data = await self._post(
            "AI API",
            {
                "model": model,
                "messages": messages,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "response_format": {"type": "json_object"},
            },
            {"Authorization": f"Bearer {token}"},
        )
        content = data.get("choices", [{}])[0].get("message", {}).get("content", "")
        return strip_fences(content or "")

    async def _request_anthropic(
        self,
        messages: list[dict],
        temperature: float,
        max_tokens: int,
        model: str,
        token: str,
    ) -> str:
        """Anthropic Messages API: system prompt is a top-level field and the
        reply text comes back as content blocks."""
        system = "\n\n".join(m["content"] for m in messages if m.get("role") == "system")
        turns = [m for m in messages if m.get("role") != "system"]

        payload: dict = {
            "model": model,
            # at least one non-system message is required
            "messages": turns or [{"role": "user", "content": "Hello"}],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if system:
            payload["system"] = system

        data = await self._post(
            "Anthropic API",
            payload,
            {"x-api-key": token, "anthropic-version": ANTHROPIC_VERSION},
        )
        blocks = data.get("content", [])
        return strip_fences("\n".join(b["text"] for b in blocks if b.get("type") == "text"))


def retry_delay(message: str, attempt: int) -> int:
    """Seconds to wait before the next attempt."""
    rate_limited = "429" in message or "RateLimitReached" in message or "overloaded" in message.lower()
    if not rate_limited:
        return attempt * 2
    wait_match = re.search(r"wait\s+(\d+)\s+second", message, re.I)
    return int(wait_match.group(1)) + 2 if wait_match else 25


# ── Parsing helpers ─────────────────────────────────────────────


def strip_fences(text: str) -> str:
    """Remove markdown code fences."""
    text = re.sub(r"^```(?:json|javascript|js)?\s*\n?", "", text, flags=re.MULTILINE)
    text = re.sub(r"^```\s*$", "", text, flags=re.MULTILINE)
    return text.strip()


def extract_json(text: str) -> dict:
    """Extract JSON object from AI response."""
    cleaned = strip_fences(text)

    try:
        parsed = json.loads(cleaned)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    # Try outermost { ... }
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        try:
            parsed = json.loads(cleaned[start : end + 1])
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError:
            pass

    raise ValueError(f"Could not extract JSON from AI response:\n{cleaned[:300]}…")
