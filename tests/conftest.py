"""Shared fixtures for catalog tests."""

import asyncio
from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from catalog_api.catalog.repository import SqlCatalogRepository
from catalog_api.catalog.service import CatalogService
from catalog_api.infrastructure.database import (
    create_tables,
    get_session,
    install_sqlite_locking,
)
from catalog_api.main import app


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    """Create a session on a fresh in-memory database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    install_sqlite_locking(engine)
    await create_tables(engine)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def service(session: AsyncSession) -> CatalogService:
    """Create a catalog service bound to the test session."""
    return CatalogService(SqlCatalogRepository(session))


@pytest.fixture
def session_factory(tmp_path) -> Generator[async_sessionmaker[AsyncSession], None, None]:
    """Create a session factory on a temporary database file.

    The test client runs each request on its own event loop, so pooled
    connections are disabled.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        poolclass=NullPool,
    )
    install_sqlite_locking(engine)
    asyncio.run(create_tables(engine))

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    asyncio.run(engine.dispose())


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """Create test client backed by the temporary database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()
