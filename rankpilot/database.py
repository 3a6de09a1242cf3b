"""
RankPilot — Async SQLAlchemy database setup.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


def make_engine(database_url: str) -> AsyncEngine:
    """Build the async engine. Pool settings only for postgres."""
    if "sqlite" in database_url:
        extra = {}
        if ":memory:" in database_url:
            # one shared connection, otherwise every session sees an empty DB
            extra = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        return create_async_engine(database_url, echo=False, **extra)

    return create_async_engine(
        database_url,
        echo=False,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,       # test connections before use (survives sleep/wake)
        pool_recycle=300,
    )


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables (used in lifespan and tests)."""
    import rankpilot.models  # noqa: F401  (registers tables on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(engine: AsyncEngine) -> None:
    await engine.dispose()
