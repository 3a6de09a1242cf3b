"""
Shared test fixtures — in-memory DB, fake AI engine, FastAPI test client.
"""

import json

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from rankpilot.config import Settings
from rankpilot.context import build_context
from rankpilot.database import close_db, init_db
from rankpilot.main import create_app
from rankpilot.models import User
from rankpilot.tools import prompts


TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# ── Sample AI replies ───────────────────────────────────

SAMPLE_KEYWORDS = {
    "keywords": [
        "podcast equipment",
        "how to start a podcast",
        "best podcast microphones for beginners",
        "podcast hosting platforms compared",
    ],
}

SAMPLE_BRIEF = {
    "title": "The Complete Guide to Sourdough Starters",
    "briefSummary": "Teach beginners to create and maintain a sourdough starter.",
    "primaryKeyword": "sourdough starter",
    "searchIntent": "informational — readers want step-by-step instructions",
    "wordCount": 1800,
    "semanticKeywords": ["wild yeast", "levain", "feeding schedule"],
    "recommendedMeta": {
        "title": "Sourdough Starter: A Beginner's Step-by-Step Guide",
        "description": "Learn how to make a sourdough starter from scratch, feed it, and fix common problems.",
    },
    "outline": [
        {"level": 2, "title": "What is a sourdough starter?", "description": "Definition"},
        {"level": 2, "title": "Ingredients", "description": "Flour and water"},
        {"level": 2, "title": "Day-by-day schedule", "description": "Feeding"},
        {"level": 3, "title": "Troubleshooting", "description": "Common issues"},
        {"level": 2, "title": "FAQ", "description": "Questions"},
    ],
}

SAMPLE_SERP = {
    "organicResults": [
        {
            "position": i,
            "title": f"Result {i}",
            "url": f"https://site{i}.example.com/page",
            "snippet": f"Snippet for result {i}",
        }
        for i in range(1, 11)
    ],
    "peopleAlsoAsk": [
        {"question": "What is it?"},
        {"question": "How does it work?"},
        {"question": "Is it worth it?"},
        {"question": "How much does it cost?"},
    ],
}

SAMPLE_AUDIT = {
    "overallScore": 72,
    "items": [
        {"id": "title-tags", "name": "Title Tags", "score": 80, "details": "Good length.", "status": "good"},
        {"id": "h1-tags", "name": "H1 Tags", "score": 40, "details": "Two H1s found.", "status": "error"},
    ],
    "summary": "Fix duplicate H1 tags first.",
}

SAMPLE_LINKS = {
    "backlinks": [
        {
            "referringDomain": "news.example.org",
            "backlinkUrl": "https://news.example.org/story",
            "anchorText": "Example",
            "domainAuthority": 88,
        },
        {
            "referringDomain": "blog.example.net",
            "backlinkUrl": "https://blog.example.net/post",
            "anchorText": "click here",
            "domainAuthority": 35,
        },
    ],
    "summary": {"totalBacklinks": 2, "referringDomains": 2},
}

SAMPLE_OPTIMIZATION = {
    "readabilitySuggestions": "Shorten the second paragraph.",
    "keywordDensitySuggestions": "Use 'coffee grinder' once more in the intro.",
    "semanticRelevanceSuggestions": "Mention burr size and grind consistency.",
    "overallScore": 64,
}

SAMPLE_COMPETITORS = {
    "rankings": [
        {
            "keyword": "running shoes",
            "yourRank": {"rank": 42, "reason": "Thin category page"},
            "competitorRanks": {
                "https://rival.example.com": {"rank": 3, "reason": "Strong reviews hub"},
            },
        },
    ],
    "contentGaps": ["buying guide for trail running shoes"],
}

DEFAULT_REPLIES = {
    prompts.KEYWORD_SYSTEM: SAMPLE_KEYWORDS,
    prompts.CONTENT_BRIEF_SYSTEM: SAMPLE_BRIEF,
    prompts.SERP_SYSTEM: SAMPLE_SERP,
    prompts.AUDIT_SYSTEM: SAMPLE_AUDIT,
    prompts.LINK_SYSTEM: SAMPLE_LINKS,
    prompts.CONTENT_OPTIMIZER_SYSTEM: SAMPLE_OPTIMIZATION,
    prompts.COMPETITOR_SYSTEM: SAMPLE_COMPETITORS,
}


class FakeEngine:
    """Stands in for AIClient. Replies by system prompt; records every call."""

    def __init__(self):
        self.calls: list[list[dict]] = []
        self.replies: dict[str, str] = {
            system: "```json\n" + json.dumps(reply) + "\n```"
            for system, reply in DEFAULT_REPLIES.items()
        }
        self.error: Exception | None = None

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def complete(self, messages, temperature=0.7, max_tokens=None, model=None, retries=0):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.replies.get(messages[0]["content"], '{"ok": true}')


# ── Settings / context ──────────────────────────────────

@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        database_url=TEST_DB_URL,
        openai_api_key="sk-test",
        allow_dev_user_header=True,
        tool_cache_ttl_secs=0,
        activity_persist_mode="await",
        migration_page_size=2,
    )


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest_asyncio.fixture()
async def ctx(test_settings, fake_engine):
    context = build_context(test_settings, ai=fake_engine)
    await init_db(context.engine)
    yield context
    await context.orchestrator.drain()
    await close_db(context.engine)


@pytest_asyncio.fixture()
async def client(ctx):
    """FastAPI test client wired to the test context."""
    app = create_app(ctx)
    app.state.ctx = ctx  # ASGITransport does not run the lifespan

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def no_page_fetch(monkeypatch):
    """Audit runs without touching the network."""

    async def _no_fetch(url):
        return None

    monkeypatch.setattr("rankpilot.tools.audit.fetch_page_text", _no_fetch)


# ── Helpers ─────────────────────────────────────────────

async def make_user(ctx, user_id: str, tier: str = "free") -> None:
    async with ctx.sessions() as session:
        session.add(User(id=user_id, tier=tier))
        await session.commit()


def as_user(user_id: str) -> dict:
    return {"X-User-Id": user_id}
