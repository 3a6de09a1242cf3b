"""
RankPilot — AI tool routes.

POST /tools/{slug}: tier gate → validate → rate limit → invoke → record activity.
"""

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Response

from rankpilot.context import AppContext, get_context
from rankpilot.errors import ToolValidationError
from rankpilot.schemas import ToolRunResponse
from rankpilot.services.access import can_access_tool, required_tier
from rankpilot.services.auth import CurrentUser, get_current_user
from rankpilot.tools import TOOL_REGISTRY, get_tool

logger = logging.getLogger(__name__)
tools_router = APIRouter(prefix="/tools", tags=["tools"])


@tools_router.get("")
async def list_tools(user: CurrentUser = Depends(get_current_user)):
    """Tools and whether the caller's tier unlocks them."""
    return {
        "tools": [
            {
                "slug": tool.slug,
                "name": tool.name,
                "type": tool.activity_type.value,
                "allowed": can_access_tool(user.tier, tool.activity_type),
                "requiredTier": required_tier(tool.activity_type).value,
            }
            for tool in TOOL_REGISTRY.values()
        ],
    }


@tools_router.post("/{slug}", response_model=ToolRunResponse)
async def run_tool(
    slug: str,
    response: Response,
    payload: dict = Body(...),
    user: CurrentUser = Depends(get_current_user),
    ctx: AppContext = Depends(get_context),
):
    tool = get_tool(slug)
    if tool is None:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {slug}")

    if not can_access_tool(user.tier, tool.activity_type):
        raise HTTPException(
            status_code=403,
            detail=f"{tool.name} requires the {required_tier(tool.activity_type).value} plan or higher",
        )

    # Rejected requests never count against the caller's quota
    try:
        params = tool.parse_input(payload)
    except ToolValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    decision = ctx.rate_limiter.check(user.id, user.tier.value)
    if not decision.allowed:
        raise HTTPException(
            status_code=429,
            detail="Rate limit exceeded — try again shortly",
            headers={"Retry-After": str(decision.retry_after)},
        )
    response.headers["X-RateLimit-Remaining"] = str(decision.remaining)

    try:
        run = await ctx.orchestrator.run(user.id, tool, params)
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))

    return ToolRunResponse(
        tool=tool.slug,
        type=tool.activity_type.value,
        result=run.output.model_dump(by_alias=True),
        cached=run.cached,
        activity_id=run.activity.id if run.activity else None,
    )
