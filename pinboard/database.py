"""Database connection and session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from pinboard.config import settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on FK enforcement for every new SQLite connection.

    SQLite ignores ON DELETE clauses unless the pragma is set per connection.
    """

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """Create an async engine, applying pool limits for server databases.

    Args:
        url: SQLAlchemy async database URL.
        **kwargs: Extra keyword arguments for create_async_engine.

    Returns:
        Configured AsyncEngine.
    """
    if url.startswith("sqlite"):
        async_engine = create_async_engine(url, **kwargs)
        enable_sqlite_foreign_keys(async_engine.sync_engine)
        return async_engine

    return create_async_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        **kwargs,
    )


engine = build_engine(settings.async_database_url, echo=settings.debug)

# Session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Don't expire objects after commit (needed for async)
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database sessions.

    Everything a request does runs in this one session and is committed
    together, or rolled back if the handler raises.

    Yields:
        AsyncSession: Database session that will be automatically closed.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
