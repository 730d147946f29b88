"""
Database connection management.

Provides async SQLAlchemy engine and session factory for the profile store.

Dependencies: sqlalchemy
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from hiring_ai.boundary.db.base import Base


def get_async_engine(url: str, echo_sql: bool = False) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early.

    Args:
        url: Async database URL (postgresql+asyncpg://..., sqlite+aiosqlite://...)
        echo_sql: Echo SQL statements to logs

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    return create_async_engine(url, echo=echo_sql, pool_pre_ping=True)


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Args:
        engine: Async engine to bind

    Returns:
        async_sessionmaker: Factory with autoflush off and no expiry on commit
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all registered tables if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
