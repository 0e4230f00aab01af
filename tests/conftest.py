"""Pytest configuration and shared fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from api.app import AppBuilder
from config import Settings
from domain.entities import User, UserRole
from infrastructure.models import Base
from repositories.user_repository import UserRepository

ALICE_TOKEN = "alice-token"
BOB_TOKEN = "bob-token"
ADMIN_TOKEN = "admin-token"


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        page_size=3,
        admin_api_token=None,
    )


@pytest_asyncio.fixture
async def test_db_engine():
    """Create a test database engine."""
    # Use in-memory SQLite for tests, shared across connections
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest.fixture
def session_maker(test_db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def users(session_maker) -> dict[str, User]:
    """Seed two regular users and one admin."""
    repo = UserRepository()
    async with session_maker() as db_session:
        alice = await repo.create(db_session, "Alice", "alice@example.com", ALICE_TOKEN)
        bob = await repo.create(db_session, "Bob", "bob@example.com", BOB_TOKEN)
        admin = await repo.create(
            db_session, "Admin", "admin@example.com", ADMIN_TOKEN, role=UserRole.ADMIN
        )
        await db_session.commit()
    return {"alice": alice, "bob": bob, "admin": admin}


@pytest.fixture
def app_builder(test_settings, session_maker) -> AppBuilder:
    """App builder wired to the test database."""
    builder = AppBuilder(test_settings)
    builder._session_maker = session_maker
    return builder


@pytest_asyncio.fixture
async def client(app_builder, users) -> AsyncGenerator[AsyncClient, None]:
    """Create an HTTP client for testing with initialized app."""
    async with AsyncClient(
        transport=ASGITransport(app=app_builder.app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ALICE_TOKEN}"}


@pytest.fixture
def bob_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {BOB_TOKEN}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
