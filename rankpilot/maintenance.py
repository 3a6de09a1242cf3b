"""
Maintenance — one-shot data fixes run by an admin.

normalize_activity_types rewrites legacy display-name activity types to the
current keys. The scan is paginated, but every update happens in one
transaction: a failure leaves the data untouched and the run can simply be
repeated. Already-normalized rows are never touched, so a second run is a
no-op.

Usage:
    python -m rankpilot.maintenance normalize-types
    python -m rankpilot.maintenance verify-types
    python -m rankpilot.maintenance audit-tiers
"""

import argparse
import asyncio
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rankpilot.activity_types import LEGACY_ACTIVITY_TYPE_MAP, NORMALIZED_TYPES
from rankpilot.errors import MigrationError
from rankpilot.models import Activity, User
from rankpilot.services.access import SubscriptionTier
from rankpilot.services.activity_store import activity_page, user_id_page

logger = logging.getLogger(__name__)

SCHEMA_MIGRATION_VERSION = "1.0.0"


@dataclass
class ActivityMigration:
    user_id: str
    activity_id: str
    current_type: str
    new_type: str

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "activityId": self.activity_id,
            "currentType": self.current_type,
            "newType": self.new_type,
        }


@dataclass
class MigrationReport:
    total_scanned: int = 0
    migrations: list[ActivityMigration] = field(default_factory=list)

    @property
    def updated(self) -> int:
        return len(self.migrations)

    def to_dict(self) -> dict:
        return {
            "success": True,
            "totalScanned": self.total_scanned,
            "updated": self.updated,
            "migrations": [m.to_dict() for m in self.migrations],
        }


async def normalize_activity_types(
    session_factory: async_sessionmaker[AsyncSession],
    page_size: int = 500,
    now: datetime | None = None,
) -> MigrationReport:
    """Rewrite legacy activity types for every user. Raises MigrationError on any failure."""
    if page_size < 1:
        raise ValueError("page_size must be positive")
    stamp = now or datetime.now(timezone.utc)
    report = MigrationReport()
    logger.info("🔧 Activity type normalization started (page size %d)", page_size)

    try:
        async with session_factory() as session:
            async with session.begin():
                after_user: str | None = None
                while True:
                    user_ids = await user_id_page(session, after_user, page_size)
                    if not user_ids:
                        break
                    for user_id in user_ids:
                        await _normalize_user(session, user_id, page_size, stamp, report)
                    after_user = user_ids[-1]
    except Exception as e:
        logger.error("❌ Activity type normalization aborted, nothing committed: %s", e)
        raise MigrationError(str(e)) from e

    logger.info(
        "🎉 Activity type normalization complete: %d scanned, %d updated",
        report.total_scanned, report.updated,
    )
    return report


async def _normalize_user(
    session: AsyncSession,
    user_id: str,
    page_size: int,
    stamp: datetime,
    report: MigrationReport,
) -> None:
    after_activity: str | None = None
    while True:
        page = await activity_page(session, user_id, after_activity, page_size)
        if not page:
            return
        for activity in page:
            report.total_scanned += 1
            new_type = LEGACY_ACTIVITY_TYPE_MAP.get(activity.type)
            if not new_type or new_type == activity.type:
                continue
            report.migrations.append(
                ActivityMigration(user_id, activity.id, activity.type, new_type)
            )
            logger.info("  🔄 %s → %s (user %s…)", activity.type, new_type, user_id[:8])
            activity.original_type = activity.type
            activity.type = new_type
            activity.schema_migration_date = stamp
            activity.schema_migration_version = SCHEMA_MIGRATION_VERSION
        after_activity = page[-1].id
        # push this page's updates, then drop the objects to keep memory flat
        await session.flush()
        session.expunge_all()


async def verify_activity_types(session_factory: async_sessionmaker[AsyncSession]) -> dict:
    """Type distribution across all activities, and any types still not normalized."""
    async with session_factory() as session:
        result = await session.execute(
            select(Activity.type, func.count()).group_by(Activity.type)
        )
        distribution = {row[0]: row[1] for row in result.all()}

    non_normalized = sorted(t for t in distribution if t not in NORMALIZED_TYPES)
    return {
        "distribution": dict(sorted(distribution.items(), key=lambda kv: -kv[1])),
        "nonNormalizedTypes": non_normalized,
        "clean": not non_normalized,
    }


async def audit_user_tiers(
    session_factory: async_sessionmaker[AsyncSession],
    limit: int = 100,
) -> dict:
    """Users per tier, plus users whose tier is not a known subscription tier."""
    known = {t.value for t in SubscriptionTier}
    async with session_factory() as session:
        result = await session.execute(select(User.tier, func.count()).group_by(User.tier))
        counts = {row[0]: row[1] for row in result.all()}

        result = await session.execute(
            select(User.id, User.tier)
            .where(User.tier.not_in(known))
            .order_by(User.id)
            .limit(limit)
        )
        unknown = [{"userId": row[0], "tier": row[1]} for row in result.all()]

    return {
        "totalUsers": sum(counts.values()),
        "byTier": counts,
        "unknownTierUsers": unknown,
    }


# ── CLI ─────────────────────────────────────────────────


async def _run_cli(command: str, page_size: int | None) -> dict:
    from rankpilot.config import Settings
    from rankpilot.database import close_db, init_db, make_engine, make_session_factory

    settings = Settings()
    engine = make_engine(settings.database_url)
    try:
        await init_db(engine)
        sessions = make_session_factory(engine)
        if command == "normalize-types":
            report = await normalize_activity_types(
                sessions, page_size=page_size or settings.migration_page_size
            )
            return report.to_dict()
        if command == "verify-types":
            return await verify_activity_types(sessions)
        return await audit_user_tiers(sessions)
    finally:
        await close_db(engine)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m rankpilot.maintenance",
        description="RankPilot data maintenance",
    )
    parser.add_argument(
        "command", choices=["normalize-types", "verify-types", "audit-tiers"],
    )
    parser.add_argument("--page-size", type=int, default=None, help="Rows read per page")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    try:
        result = asyncio.run(_run_cli(args.command, args.page_size))
    except MigrationError as e:
        print(json.dumps({"error": str(e)}, indent=2))
        return 1
    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
