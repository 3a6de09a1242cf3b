"""
Tests for the tool orchestrator — state progression, persistence modes, cache.
"""

from unittest.mock import AsyncMock, patch

import pytest

from rankpilot.errors import ToolOutputError, ToolValidationError
from rankpilot.orchestrator import (
    PERSIST_BACKGROUND,
    InvocationState,
    ToolOrchestrator,
)
from rankpilot.services.cache import ResponseCache
from rankpilot.tools import get_tool, prompts

from tests.conftest import make_user


S = InvocationState


class TestStateProgression:
    async def test_success_path(self, ctx):
        await make_user(ctx, "user-1")
        run = await ctx.orchestrator.run("user-1", get_tool("keyword-suggestions"), {"topic": "podcasts"})
        assert run.state == S.DONE
        assert run.history == [S.IDLE, S.VALIDATING, S.INVOKING, S.PERSISTING, S.DONE]
        assert run.activity is not None
        assert run.activity.type == "keyword-research"
        assert run.cached is False

    async def test_validation_failure(self, ctx, fake_engine):
        run = ctx.orchestrator.begin(get_tool("keyword-suggestions"))
        with pytest.raises(ToolValidationError):
            await ctx.orchestrator.execute(run, "user-1", {"topic": ""})
        assert run.history == [S.IDLE, S.VALIDATING, S.FAILED]
        assert isinstance(run.error, ToolValidationError)
        assert fake_engine.call_count == 0
        assert await ctx.store.list_for_user("user-1") == []

    async def test_invocation_failure_writes_nothing(self, ctx, fake_engine):
        await make_user(ctx, "user-1")
        fake_engine.replies[prompts.KEYWORD_SYSTEM] = "not json"
        run = ctx.orchestrator.begin(get_tool("keyword-suggestions"))
        with pytest.raises(ToolOutputError):
            await ctx.orchestrator.execute(run, "user-1", {"topic": "podcasts"})
        assert run.history == [S.IDLE, S.VALIDATING, S.INVOKING, S.FAILED]
        assert await ctx.store.list_for_user("user-1") == []


class TestPersistence:
    async def test_write_failure_does_not_fail_the_run(self, ctx):
        await make_user(ctx, "user-1")
        with patch.object(ctx.store, "add", new_callable=AsyncMock) as add:
            add.side_effect = RuntimeError("database is locked")
            run = await ctx.orchestrator.run(
                "user-1", get_tool("serp-view"), {"keyword": "running shoes"}
            )
        assert run.state == S.DONE
        assert run.output is not None
        assert run.activity is None
        add.assert_awaited_once()

    async def test_background_mode(self, ctx, fake_engine):
        await make_user(ctx, "user-1")
        orchestrator = ToolOrchestrator(fake_engine, ctx.store, persist_mode=PERSIST_BACKGROUND)
        run = await orchestrator.run("user-1", get_tool("keyword-suggestions"), {"topic": "podcasts"})
        assert run.state == S.DONE
        assert orchestrator.pending_writes == 1

        await orchestrator.drain()
        assert run.activity is not None
        rows = await ctx.store.list_for_user("user-1")
        assert len(rows) == 1

    async def test_background_write_failure_is_swallowed(self, ctx, fake_engine):
        store = AsyncMock()
        store.add.side_effect = RuntimeError("boom")
        orchestrator = ToolOrchestrator(fake_engine, store, persist_mode=PERSIST_BACKGROUND)
        run = await orchestrator.run("user-1", get_tool("keyword-suggestions"), {"topic": "podcasts"})
        await orchestrator.drain()
        assert run.state == S.DONE
        assert run.activity is None

    def test_rejects_unknown_mode(self, fake_engine):
        with pytest.raises(ValueError, match="persist_mode"):
            ToolOrchestrator(fake_engine, AsyncMock(), persist_mode="later")


class TestCache:
    async def test_repeat_request_served_from_cache(self, ctx, fake_engine):
        await make_user(ctx, "user-1")
        orchestrator = ToolOrchestrator(fake_engine, ctx.store, cache=ResponseCache(ttl_secs=60))
        tool = get_tool("keyword-suggestions")

        first = await orchestrator.run("user-1", tool, {"topic": "podcasts"})
        second = await orchestrator.run("user-1", tool, {"topic": "podcasts"})

        assert first.cached is False
        assert second.cached is True
        assert fake_engine.call_count == 1
        # every request is still recorded
        assert len(await ctx.store.list_for_user("user-1")) == 2

    async def test_disabled_cache_always_invokes(self, ctx, fake_engine):
        await make_user(ctx, "user-1")
        tool = get_tool("keyword-suggestions")
        await ctx.orchestrator.run("user-1", tool, {"topic": "podcasts"})
        await ctx.orchestrator.run("user-1", tool, {"topic": "podcasts"})
        assert fake_engine.call_count == 2
