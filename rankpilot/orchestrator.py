"""
Tool Orchestrator — validate → invoke → persist for one tool request.

The tool result is the contract with the caller. The activity write that
follows is best effort: a failed write is logged, never raised.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from rankpilot.models import Activity
from rankpilot.services.activity_store import ActivityStore
from rankpilot.services.cache import ResponseCache
from rankpilot.tools.base import PromptEngine, Tool

logger = logging.getLogger(__name__)

PERSIST_AWAIT = "await"
PERSIST_BACKGROUND = "background"
PERSIST_MODES = (PERSIST_AWAIT, PERSIST_BACKGROUND)


class InvocationState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    INVOKING = "invoking"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ToolRun:
    """Progress of one tool request."""

    tool: Tool
    state: InvocationState = InvocationState.IDLE
    history: list[InvocationState] = field(default_factory=lambda: [InvocationState.IDLE])
    params: BaseModel | None = None
    output: BaseModel | None = None
    activity: Activity | None = None
    cached: bool = False
    error: Exception | None = None

    def advance(self, state: InvocationState) -> None:
        self.state = state
        self.history.append(state)

    def fail(self, exc: Exception) -> None:
        self.error = exc
        self.advance(InvocationState.FAILED)


class ToolOrchestrator:
    def __init__(
        self,
        engine: PromptEngine,
        store: ActivityStore,
        cache: ResponseCache | None = None,
        persist_mode: str = PERSIST_AWAIT,
    ):
        if persist_mode not in PERSIST_MODES:
            raise ValueError(f"persist_mode must be one of {PERSIST_MODES}, got {persist_mode!r}")
        self.engine = engine
        self.store = store
        self.cache = cache
        self.persist_mode = persist_mode
        self._pending: set[asyncio.Task] = set()

    # ── Public API ──────────────────────────────────────

    def begin(self, tool: Tool) -> ToolRun:
        return ToolRun(tool=tool)

    async def execute(self, run: ToolRun, user_id: str, payload: Any) -> ToolRun:
        """Drive ``run`` to DONE, or mark it FAILED and re-raise the error."""
        tool = run.tool

        run.advance(InvocationState.VALIDATING)
        try:
            run.params = tool.parse_input(payload)
        except Exception as exc:
            run.fail(exc)
            raise

        run.advance(InvocationState.INVOKING)
        try:
            run.output, run.cached = await self._invoke(tool, run.params)
        except Exception as exc:
            logger.error("❌ %s failed for %s: %s", tool.slug, user_id, exc)
            run.fail(exc)
            raise

        run.advance(InvocationState.PERSISTING)
        record = tool.activity_for(run.params, run.output)
        if self.persist_mode == PERSIST_BACKGROUND:
            task = asyncio.create_task(self._persist(run, user_id, record))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        else:
            await self._persist(run, user_id, record)

        run.advance(InvocationState.DONE)
        logger.info("✅ %s done for %s%s", tool.slug, user_id, " (cached)" if run.cached else "")
        return run

    async def run(self, user_id: str, tool: Tool, payload: Any) -> ToolRun:
        return await self.execute(self.begin(tool), user_id, payload)

    async def drain(self) -> None:
        """Wait for background activity writes. Used at shutdown and in tests."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    # ── Internals ───────────────────────────────────────

    async def _invoke(self, tool: Tool, params: BaseModel) -> tuple[BaseModel, bool]:
        key_params = params.model_dump(mode="json", by_alias=True)
        if self.cache is not None:
            hit = self.cache.get(tool.slug, key_params)
            if hit is not None:
                return hit, True

        output = await tool.invoke(self.engine, params)
        if self.cache is not None:
            self.cache.set(tool.slug, key_params, output)
        return output, False

    async def _persist(self, run: ToolRun, user_id: str, record) -> None:
        try:
            run.activity = await self.store.add(user_id, record)
        except Exception as e:
            logger.warning("Failed to write %s activity for %s: %s", record.type, user_id, e)
