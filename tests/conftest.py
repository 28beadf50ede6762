"""Pytest configuration for all tests."""

import os

os.environ.setdefault("CLOUDAUTH_ENVIRONMENT", "testing")
os.environ.setdefault("CLOUDAUTH_LOG_FORMAT", "console")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cloudauth.infrastructure.auth import JWTService, hash_password
from cloudauth.infrastructure.persistence import models  # noqa: F401
from cloudauth.infrastructure.persistence.database import Base, enable_sqlite_foreign_keys
from cloudauth.infrastructure.persistence.models import SkillTagModel

TEST_SECRET_KEY = "test-secret-key-for-cloudauth-tests-only"
SEEDED_SKILL_TAGS = ("backend", "frontend", "devops")


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database, with foreign keys enforced, seeded
    with a few skill tags.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        session.add_all([SkillTagModel(name=name) for name in SEEDED_SKILL_TAGS])
        await session.commit()

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_jwt_service() -> JWTService:
    """JWT service signing with a fixed test key."""
    return JWTService(secret_key=TEST_SECRET_KEY)


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, test_jwt_service: JWTService
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database and token dependencies."""
    from cloudauth.infrastructure.api.app import app
    from cloudauth.infrastructure.api.dependencies import get_jwt_service
    from cloudauth.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session
    app.dependency_overrides[get_jwt_service] = lambda: test_jwt_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Argon2 hash of ``"Sup3r-secret"``, computed once per session."""
    return hash_password("Sup3r-secret")
