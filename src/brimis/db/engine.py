"""Async SQLAlchemy engine and session creation."""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from brimis.config import settings


def create_db_engine(url: str | None = None) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    SQLite does not support pool_size / max_overflow, and needs foreign keys
    switched on per connection for job deletes to cascade.
    """
    db_url = url or settings.effective_database_url
    if "sqlite" in db_url:
        engine = create_async_engine(db_url, echo=False)
        enable_sqlite_foreign_keys(engine)
        return engine
    return create_async_engine(db_url, echo=False, pool_size=10, max_overflow=20)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_all_tables(engine: AsyncEngine) -> None:
    """Create every registered table (local mode and tests; no migrations)."""
    from brimis.db.base import Base
    import brimis.db.models  # noqa: F401 (registers all ORM models)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
