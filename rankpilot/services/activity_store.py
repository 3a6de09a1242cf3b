"""
RankPilot — Activity persistence.

Writes activity records with a database-assigned timestamp and mirrors
each row to the Firebase activity feed when it is configured.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rankpilot.activity_types import ActivityRecord
from rankpilot.models import Activity, User
from rankpilot.services.firebase import FirebaseBridge

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class ActivityStore:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        mirror: FirebaseBridge | None = None,
    ):
        self.session_factory = session_factory
        self.mirror = mirror

    async def ensure_user(self, user_id: str, email: str | None = None) -> User:
        """Get or create the user row. New users start on the free tier.

        Concurrent first requests for the same user insert at most one row.
        """
        async with self.session_factory() as session:
            user = await session.get(User, user_id)
            if user is None:
                insert = _DIALECT_INSERTS[session.bind.dialect.name]
                result = await session.execute(
                    insert(User)
                    .values(id=user_id, email=email, tier="free")
                    .on_conflict_do_nothing(index_elements=["id"])
                )
                await session.commit()
                if result.rowcount:
                    logger.info("👤 Registered user %s", user_id)
                user = await session.get(User, user_id)
            elif email and user.email != email:
                user.email = email
                await session.commit()
            return user

    async def add(self, user_id: str, record: ActivityRecord) -> Activity:
        """Persist one activity. The timestamp comes from the database clock."""
        async with self.session_factory() as session:
            entry = Activity(
                user_id=user_id,
                type=record.type,
                tool=record.tool,
                details=record.details,
                results_summary=record.results_summary,
            )
            session.add(entry)
            await session.commit()
            await session.refresh(entry)

        if self.mirror is not None:
            self.mirror.sync_activity(user_id, entry.to_dict())
        return entry

    async def list_for_user(
        self,
        user_id: str,
        limit: int = 50,
        activity_type: str | None = None,
    ) -> list[Activity]:
        """Newest first."""
        stmt = (
            select(Activity)
            .where(Activity.user_id == user_id)
            .order_by(Activity.timestamp.desc(), Activity.seq.desc())
            .limit(limit)
        )
        if activity_type:
            stmt = stmt.where(Activity.type == activity_type)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def count_by_type(self, user_id: str | None = None) -> dict[str, int]:
        stmt = select(Activity.type, func.count()).group_by(Activity.type)
        if user_id is not None:
            stmt = stmt.where(Activity.user_id == user_id)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return {row[0]: row[1] for row in result.all()}


# ── Paginated scans (used by maintenance) ───────────────


async def user_id_page(
    session: AsyncSession, after_id: str | None, page_size: int
) -> list[str]:
    stmt = select(User.id).order_by(User.id).limit(page_size)
    if after_id is not None:
        stmt = stmt.where(User.id > after_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def activity_page(
    session: AsyncSession, user_id: str, after_id: str | None, page_size: int
) -> list[Activity]:
    stmt = (
        select(Activity)
        .where(Activity.user_id == user_id)
        .order_by(Activity.id)
        .limit(page_size)
    )
    if after_id is not None:
        stmt = stmt.where(Activity.id > after_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())
