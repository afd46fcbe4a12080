"""
Database connection and session management for sitecms.
"""
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sitecms.config import settings
from sitecms.models.base import Base

DATABASE_URL = settings.async_database_url

engine_options = {
    "echo": settings.ENVIRONMENT == "development",
    "pool_pre_ping": True,
}
# SQLite engines use a single-connection pool that takes no sizing options
if DATABASE_URL.startswith("postgresql"):
    engine_options.update(pool_size=10, max_overflow=20)


def enable_sqlite_savepoints(async_engine: AsyncEngine) -> None:
    """
    Let SQLAlchemy emit BEGIN itself on SQLite connections.

    The sqlite3 driver starts transactions lazily, so SAVEPOINT
    (``Session.begin_nested``) only works once BEGIN is explicit.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = create_async_engine(DATABASE_URL, **engine_options)
if DATABASE_URL.startswith("sqlite"):
    enable_sqlite_savepoints(engine)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """Initialize database tables."""
    from sitecms.models.site import Site
    from sitecms.models.content import Category, File, Layout, Page, Snippet

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
