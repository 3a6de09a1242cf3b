"""
RankPilot — Admin maintenance routes.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from rankpilot.context import AppContext, get_context
from rankpilot.errors import MigrationError
from rankpilot.maintenance import audit_user_tiers, normalize_activity_types, verify_activity_types
from rankpilot.services.auth import CurrentUser, require_admin

logger = logging.getLogger(__name__)
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.post("/migrations/activity-types")
async def migrate_activity_types(
    admin: CurrentUser = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    """Rewrite legacy activity types to the current keys. Safe to re-run."""
    logger.info("🚨 Activity type migration triggered by %s", admin.id)
    try:
        report = await normalize_activity_types(
            ctx.sessions, page_size=ctx.settings.migration_page_size
        )
    except MigrationError as e:
        return JSONResponse(status_code=500, content={"error": str(e)})
    return report.to_dict()


@admin_router.get("/migrations/activity-types/verify")
async def verify_activity_type_migration(
    admin: CurrentUser = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    return await verify_activity_types(ctx.sessions)


@admin_router.get("/users/tiers")
async def user_tier_audit(
    admin: CurrentUser = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    return await audit_user_tiers(ctx.sessions)
