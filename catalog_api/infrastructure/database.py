"""Database configuration and session management.

Provides async SQLAlchemy engine and session factory.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from catalog_api.infrastructure.config import settings

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)


def install_sqlite_locking(bind: AsyncEngine) -> None:
    """Start every SQLite transaction with the database write lock held.

    pysqlite defers BEGIN until the first write statement, which leaves
    the reads of a read-then-write unit of work (the guarded category
    delete) open to concurrent writers. The hooks take over transaction
    control and emit ``BEGIN IMMEDIATE`` instead. Other dialects are left
    untouched.

    Args:
        bind: Engine to install the hooks on.
    """
    if bind.dialect.name != "sqlite":
        return

    @event.listens_for(bind.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(bind.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


install_sqlite_locking(engine)

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for models
Base = declarative_base()


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create database tables if they don't exist.

    Args:
        bind: Engine to create the tables on.
    """
    # Register ORM tables on the metadata
    import catalog_api.infrastructure.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(bind: AsyncEngine = engine) -> None:
    """Drop all catalog tables.

    Args:
        bind: Engine to drop the tables from.
    """
    import catalog_api.infrastructure.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession for database operations.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
