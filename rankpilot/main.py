"""
FastAPI Application — entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rankpilot.config import Settings
from rankpilot.context import AppContext, build_context
from rankpilot.routes import VERSION, router
from rankpilot.routes.activity import activity_router
from rankpilot.routes.admin import admin_router
from rankpilot.routes.tools import tools_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)

logger = logging.getLogger(__name__)


def create_app(ctx: AppContext | None = None) -> FastAPI:
    """Build the app. A prebuilt context (tests) skips Settings-driven wiring."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Starting RankPilot API v%s", VERSION)
        context = ctx or build_context(Settings())
        await context.start()
        app.state.ctx = context
        logger.info(
            "⚙️ Activity persist mode: %s, tool cache: %s",
            context.settings.activity_persist_mode,
            "on" if context.cache.enabled else "off",
        )

        yield

        await context.stop()
        logger.info("👋 Shutdown complete")

    app = FastAPI(
        title="RankPilot API",
        description="AI-assisted SEO tools — keyword research, audits, SERP and competitor analysis.",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api/v1")
    app.include_router(tools_router, prefix="/api/v1")
    app.include_router(activity_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "service": "RankPilot API",
            "version": VERSION,
            "docs": "/docs",
        }

    return app


app = create_app()
