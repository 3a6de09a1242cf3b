"""
RankPilot — Application context.

Everything with process lifetime (DB engine, AI client, Firebase app, rate
limiter, cache, orchestrator) is built once here and handed to the routes
through ``app.state.ctx``.
"""

import logging
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from rankpilot.config import Settings
from rankpilot.database import close_db, init_db, make_engine, make_session_factory
from rankpilot.orchestrator import ToolOrchestrator
from rankpilot.services.activity_store import ActivityStore
from rankpilot.services.ai import AIClient
from rankpilot.services.cache import ResponseCache
from rankpilot.services.firebase import FirebaseBridge
from rankpilot.services.rate_limit import RateLimiter
from rankpilot.tools.base import PromptEngine

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    engine: AsyncEngine
    sessions: async_sessionmaker[AsyncSession]
    firebase: FirebaseBridge
    ai: PromptEngine
    store: ActivityStore
    rate_limiter: RateLimiter
    cache: ResponseCache
    orchestrator: ToolOrchestrator

    async def start(self) -> None:
        await init_db(self.engine)
        logger.info("✅ Database ready")
        if self.firebase.init(
            cred_path=self.settings.firebase_cred_path,
            db_url=self.settings.firebase_db_url,
        ):
            logger.info("✅ Firebase bridge ready")
        else:
            logger.info("ℹ️ Firebase bridge disabled (no credentials)")

    async def stop(self) -> None:
        await self.orchestrator.drain()
        self.firebase.close()
        await close_db(self.engine)


def build_context(
    settings: Settings,
    *,
    ai: PromptEngine | None = None,
    firebase: FirebaseBridge | None = None,
) -> AppContext:
    """Wire up all services. ``ai`` / ``firebase`` may be replaced (tests)."""
    engine = make_engine(settings.database_url)
    sessions = make_session_factory(engine)
    firebase = firebase or FirebaseBridge()
    ai = ai or AIClient(settings)
    store = ActivityStore(sessions, mirror=firebase)
    cache = ResponseCache(settings.tool_cache_ttl_secs, settings.tool_cache_max_entries)
    return AppContext(
        settings=settings,
        engine=engine,
        sessions=sessions,
        firebase=firebase,
        ai=ai,
        store=store,
        rate_limiter=RateLimiter(settings.rate_limits),
        cache=cache,
        orchestrator=ToolOrchestrator(
            ai, store, cache=cache, persist_mode=settings.activity_persist_mode
        ),
    )


def get_context(request: Request) -> AppContext:
    """FastAPI dependency — the context built in the app lifespan."""
    return request.app.state.ctx
