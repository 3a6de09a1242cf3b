"""
RankPilot — Activity history routes for the signed-in user.
"""

import logging

from fastapi import APIRouter, Depends, Query

from rankpilot.activity_types import ActivityType
from rankpilot.context import AppContext, get_context
from rankpilot.schemas import ActivityListResponse, ActivityOut, ActivitySummaryResponse
from rankpilot.services.auth import CurrentUser, get_current_user

logger = logging.getLogger(__name__)
activity_router = APIRouter(prefix="/activity", tags=["activity"])


@activity_router.get("", response_model=ActivityListResponse)
async def list_activities(
    type: ActivityType | None = Query(None, description="Filter by activity type"),
    limit: int = Query(50, ge=1, le=500),
    user: CurrentUser = Depends(get_current_user),
    ctx: AppContext = Depends(get_context),
):
    """List the caller's activities, newest first."""
    rows = await ctx.store.list_for_user(
        user.id, limit=limit, activity_type=type.value if type else None
    )
    return ActivityListResponse(
        activities=[ActivityOut.model_validate(row.to_dict()) for row in rows],
        total=len(rows),
    )


@activity_router.get("/summary", response_model=ActivitySummaryResponse)
async def activity_summary(
    user: CurrentUser = Depends(get_current_user),
    ctx: AppContext = Depends(get_context),
):
    counts = await ctx.store.count_by_type(user.id)
    return ActivitySummaryResponse(counts=counts, total=sum(counts.values()))
