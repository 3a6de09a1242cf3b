"""
API Routes — health.
Tool, activity and admin routers live in their own modules.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from rankpilot.context import AppContext, get_context
from rankpilot.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()

VERSION = "1.0.0"


# ── Health ──────────────────────────────────────────────

@router.get("/health", response_model=HealthResponse, tags=["system"])
async def health(ctx: AppContext = Depends(get_context)):
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=VERSION,
        firebase=ctx.firebase.initialized,
    )
