"""
Tests for API routes — health, tools, activity history, auth.
"""

import pytest

from rankpilot.activity_types import NORMALIZED_TYPES, is_normalized_type

from tests.conftest import as_user, make_user


class TestHealthEndpoint:
    async def test_health(self, client):
        resp = await client.get("/api/v1/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["version"] == "1.0.0"
        assert data["firebase"] is False
        assert "timestamp" in data


class TestRootEndpoint:
    async def test_root(self, client):
        resp = await client.get("/")
        assert resp.status_code == 200
        assert "RankPilot" in resp.json()["service"]


class TestAuth:
    async def test_missing_credentials(self, client):
        resp = await client.post("/api/v1/tools/serp-view", json={"keyword": "shoes"})
        assert resp.status_code == 401

    async def test_bad_token_without_firebase(self, client):
        resp = await client.get(
            "/api/v1/activity", headers={"Authorization": "Bearer not-a-token"}
        )
        assert resp.status_code == 401

    async def test_dev_header_disabled(self, client, ctx):
        ctx.settings.allow_dev_user_header = False
        resp = await client.get("/api/v1/activity", headers=as_user("user-1"))
        assert resp.status_code == 401


class TestToolsAPI:
    async def test_keyword_research_records_activity(self, client):
        resp = await client.post(
            "/api/v1/tools/keyword-suggestions",
            json={"topic": "podcasts", "includeLongTailKeywords": True},
            headers=as_user("user-1"),
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["tool"] == "keyword-suggestions"
        assert data["type"] == "keyword-research"
        assert data["cached"] is False
        assert len(data["result"]["keywords"]) == 4
        assert data["activityId"]

        resp = await client.get("/api/v1/activity", headers=as_user("user-1"))
        activities = resp.json()["activities"]
        assert len(activities) == 1
        entry = activities[0]
        assert entry["id"] == data["activityId"]
        assert entry["type"] == "keyword-research"
        assert entry["tool"] == "Keyword Research"
        assert entry["userId"] == "user-1"
        assert entry["details"]["topic"] == "podcasts"
        assert entry["resultsSummary"] == 'Found 4 keywords for "podcasts".'
        assert entry["timestamp"]

    async def test_engine_failure_returns_500_without_activity(self, client, fake_engine, no_page_fetch):
        fake_engine.error = RuntimeError("AI API HTTP 500: upstream exploded")
        resp = await client.post(
            "/api/v1/tools/seo-audit",
            json={"url": "https://example.com"},
            headers=as_user("user-1"),
        )
        assert resp.status_code == 500
        assert "upstream exploded" in resp.json()["detail"]

        resp = await client.get("/api/v1/activity", headers=as_user("user-1"))
        assert resp.json()["activities"] == []

    async def test_invalid_output_returns_500(self, client, fake_engine):
        from rankpilot.tools import prompts

        fake_engine.replies[prompts.SERP_SYSTEM] = '{"organicResults": []}'
        resp = await client.post(
            "/api/v1/tools/serp-view", json={"keyword": "shoes"}, headers=as_user("user-1")
        )
        assert resp.status_code == 500
        assert resp.json()["detail"] == "AI did not return valid data for SERP Analysis."

    async def test_invalid_input_returns_422(self, client, fake_engine):
        resp = await client.post(
            "/api/v1/tools/keyword-suggestions",
            json={"topic": "x"},
            headers=as_user("user-1"),
        )
        assert resp.status_code == 422
        assert "topic" in resp.json()["detail"]
        assert fake_engine.call_count == 0

    async def test_unknown_tool(self, client):
        resp = await client.post(
            "/api/v1/tools/backlink-sniper", json={}, headers=as_user("user-1")
        )
        assert resp.status_code == 404

    async def test_free_tier_blocked_from_paid_tool(self, client, fake_engine):
        resp = await client.post(
            "/api/v1/tools/content-brief",
            json={"keyword": "sourdough starter"},
            headers=as_user("user-1"),
        )
        assert resp.status_code == 403
        assert "starter" in resp.json()["detail"]
        assert fake_engine.call_count == 0

    async def test_paid_tier_runs_paid_tool(self, client, ctx):
        await make_user(ctx, "pro-1", tier="agency")
        resp = await client.post(
            "/api/v1/tools/content-brief",
            json={"keyword": "sourdough starter"},
            headers=as_user("pro-1"),
        )
        assert resp.status_code == 200
        result = resp.json()["result"]
        assert result["primaryKeyword"] == "sourdough starter"
        assert result["recommendedMeta"]["title"]

    async def test_rate_limit(self, client, ctx):
        limit = ctx.settings.rate_limit_free
        for _ in range(limit):
            resp = await client.post(
                "/api/v1/tools/serp-view", json={"keyword": "shoes"}, headers=as_user("user-1")
            )
            assert resp.status_code == 200
        assert resp.headers["X-RateLimit-Remaining"] == "0"

        resp = await client.post(
            "/api/v1/tools/serp-view", json={"keyword": "shoes"}, headers=as_user("user-1")
        )
        assert resp.status_code == 429
        assert int(resp.headers["Retry-After"]) >= 1

        # other users are unaffected
        resp = await client.post(
            "/api/v1/tools/serp-view", json={"keyword": "shoes"}, headers=as_user("user-2")
        )
        assert resp.status_code == 200

    async def test_rejected_requests_keep_quota(self, client, ctx):
        headers = as_user("user-1")
        for _ in range(ctx.settings.rate_limit_free + 2):
            resp = await client.post(
                "/api/v1/tools/content-brief", json={"keyword": "sourdough"}, headers=headers
            )
            assert resp.status_code == 403
            resp = await client.post(
                "/api/v1/tools/serp-view", json={"keyword": ""}, headers=headers
            )
            assert resp.status_code == 422

        resp = await client.post(
            "/api/v1/tools/serp-view", json={"keyword": "shoes"}, headers=headers
        )
        assert resp.status_code == 200
        assert resp.headers["X-RateLimit-Remaining"] == str(ctx.settings.rate_limit_free - 1)

    async def test_list_tools(self, client):
        resp = await client.get("/api/v1/tools", headers=as_user("user-1"))
        assert resp.status_code == 200
        tools = {t["slug"]: t for t in resp.json()["tools"]}
        assert len(tools) == 7
        assert tools["seo-audit"]["allowed"] is True
        assert tools["content-brief"]["allowed"] is False
        assert tools["content-brief"]["requiredTier"] == "starter"


TOOL_PAYLOADS = {
    "keyword-suggestions": {"topic": "podcasts"},
    "content-brief": {"keyword": "sourdough starter"},
    "serp-view": {"keyword": "running shoes"},
    "seo-audit": {"url": "https://example.com"},
    "link-analysis": {"url": "https://example.com"},
    "content-optimizer": {
        "content": "A burr coffee grinder gives a consistent grind for espresso.",
        "targetKeywords": "coffee grinder",
    },
    "competitor-analysis": {
        "yourUrl": "https://me.example.com",
        "competitorUrls": ["https://rival.example.com"],
        "keywords": ["running shoes"],
    },
}


class TestEveryToolRecordsNormalizedType:
    async def test_all_tools(self, client, ctx, no_page_fetch):
        await make_user(ctx, "pro-1", tier="agency")
        for slug, payload in TOOL_PAYLOADS.items():
            resp = await client.post(f"/api/v1/tools/{slug}", json=payload, headers=as_user("pro-1"))
            assert resp.status_code == 200, (slug, resp.text)

        resp = await client.get("/api/v1/activity", headers=as_user("pro-1"))
        activities = resp.json()["activities"]
        assert len(activities) == 7
        assert {a["type"] for a in activities} == NORMALIZED_TYPES
        assert all(is_normalized_type(a["type"]) for a in activities)


class TestActivityAPI:
    @pytest.fixture
    async def seeded(self, client, ctx, no_page_fetch):
        await make_user(ctx, "pro-1", tier="starter")
        headers = as_user("pro-1")
        await client.post("/api/v1/tools/keyword-suggestions", json={"topic": "podcasts"}, headers=headers)
        await client.post("/api/v1/tools/serp-view", json={"keyword": "shoes"}, headers=headers)
        await client.post(
            "/api/v1/tools/seo-audit", json={"url": "https://bakery.example.com"}, headers=headers
        )
        return headers

    async def test_filter_by_type(self, client, seeded):
        resp = await client.get("/api/v1/activity?type=audit", headers=seeded)
        data = resp.json()
        assert data["total"] == 1
        assert data["activities"][0]["details"] == {"url": "https://bakery.example.com", "score": 72}

    async def test_unknown_type_filter_rejected(self, client, seeded):
        resp = await client.get("/api/v1/activity?type=Keyword%20Search", headers=seeded)
        assert resp.status_code == 422

    async def test_summary(self, client, seeded):
        resp = await client.get("/api/v1/activity/summary", headers=seeded)
        data = resp.json()
        assert data["total"] == 3
        assert data["counts"] == {"keyword-research": 1, "serp-analysis": 1, "audit": 1}

    async def test_history_is_per_user(self, client, seeded):
        resp = await client.get("/api/v1/activity", headers=as_user("someone-else"))
        assert resp.json()["total"] == 0
