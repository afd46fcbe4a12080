"""
Pytest configuration and fixtures for sitecms tests.
"""
import os
import uuid
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Settings are read at import time
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")

from sitecms.database import enable_sqlite_savepoints, get_db
from sitecms.models.base import Base
from sitecms.models.site import Site
from sitecms.services.site_resolver import RoutingConfig

# Use SQLite for testing (in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    enable_sqlite_savepoints(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_site(db_session: AsyncSession) -> Callable:
    """Factory adding sites straight to the session, bypassing the service."""

    async def _make_site(**fields) -> Site:
        fields.setdefault("path", "")
        fields.setdefault("label", fields.get("identifier", "Site"))
        site = Site(**fields)
        db_session.add(site)
        await db_session.flush()
        return site

    return _make_site


# ============================================================================
# FastAPI App Fixtures
# ============================================================================

@pytest.fixture
def routing_config() -> RoutingConfig:
    """Routing options used by the test application."""
    return RoutingConfig()


@pytest.fixture(scope="function")
def app(db_session: AsyncSession, routing_config: RoutingConfig) -> FastAPI:
    """Create test FastAPI application."""
    from sitecms.core.deps import get_routing_config
    from sitecms.main import app as main_app

    async def override_get_db():
        yield db_session

    main_app.dependency_overrides[get_db] = override_get_db
    main_app.dependency_overrides[get_routing_config] = lambda: routing_config

    yield main_app

    main_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Authentication Fixtures
# ============================================================================

@pytest.fixture
def admin_headers() -> dict:
    """Authentication headers for an administrator."""
    from sitecms.core.security import create_access_token

    token = create_access_token(data={"sub": "admin@example.com", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def viewer_headers() -> dict:
    """Authentication headers for a read-only user."""
    from sitecms.core.security import create_access_token

    token = create_access_token(data={"sub": "viewer@example.com", "role": "viewer"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def site_id() -> uuid.UUID:
    """An ID no site is stored under."""
    return uuid.UUID("00000000-0000-0000-0000-000000000003")
