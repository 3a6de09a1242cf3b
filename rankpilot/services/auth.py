"""
RankPilot — Request authentication.

Callers send a Firebase ID token as ``Authorization: Bearer <token>``.
With ``allow_dev_user_header`` enabled, ``X-User-Id`` is accepted instead.
"""

import asyncio
import logging
from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

from rankpilot.context import AppContext, get_context
from rankpilot.services.access import SubscriptionTier, is_admin, resolve_tier

logger = logging.getLogger(__name__)


@dataclass
class CurrentUser:
    id: str
    tier: SubscriptionTier
    email: str | None = None


async def get_current_user(
    authorization: str | None = Header(None),
    x_user_id: str | None = Header(None),
    ctx: AppContext = Depends(get_context),
) -> CurrentUser:
    """FastAPI dependency — resolves the caller and their subscription tier."""
    uid: str | None = None
    email: str | None = None

    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
        try:
            claims = await asyncio.to_thread(ctx.firebase.verify_id_token, token)
        except ValueError as e:
            logger.info("Rejected ID token: %s", e)
            raise HTTPException(status_code=401, detail="Invalid or expired ID token")
        uid = claims.get("uid") or claims.get("sub")
        email = claims.get("email")
    elif ctx.settings.allow_dev_user_header and x_user_id:
        uid = x_user_id.strip()

    if not uid:
        raise HTTPException(status_code=401, detail="Authentication required")

    user = await ctx.store.ensure_user(uid, email)
    return CurrentUser(id=user.id, tier=resolve_tier(user.tier), email=user.email)


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not is_admin(user.tier):
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
