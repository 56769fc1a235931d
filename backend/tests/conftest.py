"""
Pytest fixtures: a fresh database per test, repositories wired to an
in-process change feed, accounts for every role, and an HTTP client.

Runs on in-memory SQLite by default; point TEST_DATABASE_URL at a Postgres
database (postgresql+asyncpg://...) to run against the production dialect.
"""

import os
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from venuebook.main import app
from venuebook.api.deps import get_media_store, get_repositories
from venuebook.core.identity import Principal, Role
from venuebook.core.security import create_access_token
from venuebook.db.base import Base
from venuebook.db.session import create_session_factory
from venuebook.models.event import Event
from venuebook.models.user import UserProfile
from venuebook.repositories import Repositories
from venuebook.schemas.event import EventCreate
from venuebook.schemas.user import UserCreate
from venuebook.services.auth_service import create_account, principal_for
from venuebook.services.change_feed import InProcessChangeFeed
from venuebook.services.event_service import create_event
from venuebook.services.media_service import LocalMediaStore

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")
TEST_PASSWORD = "testpassword123"


@pytest_asyncio.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create tables, yield engine, then drop tables for isolation."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def feed() -> InProcessChangeFeed:
    return InProcessChangeFeed()


@pytest_asyncio.fixture
async def repos(engine: AsyncEngine, feed: InProcessChangeFeed) -> Repositories:
    return Repositories.build(create_session_factory(engine), feed)


@pytest_asyncio.fixture
async def media_store(tmp_path) -> LocalMediaStore:
    return LocalMediaStore(root=str(tmp_path / "media"), base_url="http://test/media")


@pytest_asyncio.fixture(scope="function")
async def client(repos: Repositories, media_store: LocalMediaStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the test repositories and media store injected."""
    app.dependency_overrides[get_repositories] = lambda: repos
    app.dependency_overrides[get_media_store] = lambda: media_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def make_account(repos: Repositories, email: str, role: Role, name: str = "Test User") -> UserProfile:
    return await create_account(
        repos,
        UserCreate(full_name=name, email=email, phone_number="555-0100", password=TEST_PASSWORD),
        role,
    )


def headers_for(profile: UserProfile) -> dict:
    token = create_access_token(data={"sub": profile.id})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def hotel_user(repos: Repositories) -> UserProfile:
    return await make_account(repos, "hotel@example.com", Role.HOTEL, "Grand Hotel")


@pytest_asyncio.fixture
async def other_hotel_user(repos: Repositories) -> UserProfile:
    return await make_account(repos, "rival@example.com", Role.HOTEL, "Rival Hotel")


@pytest_asyncio.fixture
async def consumer_user(repos: Repositories) -> UserProfile:
    return await make_account(repos, "guest@example.com", Role.CONSUMER, "Guest One")


@pytest_asyncio.fixture
async def other_consumer_user(repos: Repositories) -> UserProfile:
    return await make_account(repos, "guest2@example.com", Role.CONSUMER, "Guest Two")


@pytest_asyncio.fixture
async def admin_user(repos: Repositories) -> UserProfile:
    return await make_account(repos, "admin@example.com", Role.ADMIN, "Admin")


@pytest_asyncio.fixture
async def hotel(hotel_user: UserProfile) -> Principal:
    return principal_for(hotel_user)


@pytest_asyncio.fixture
async def other_hotel(other_hotel_user: UserProfile) -> Principal:
    return principal_for(other_hotel_user)


@pytest_asyncio.fixture
async def consumer(consumer_user: UserProfile) -> Principal:
    return principal_for(consumer_user)


@pytest_asyncio.fixture
async def other_consumer(other_consumer_user: UserProfile) -> Principal:
    return principal_for(other_consumer_user)


@pytest_asyncio.fixture
async def admin(admin_user: UserProfile) -> Principal:
    return principal_for(admin_user)


@pytest_asyncio.fixture
async def hotel_headers(hotel_user: UserProfile) -> dict:
    return headers_for(hotel_user)


@pytest_asyncio.fixture
async def other_hotel_headers(other_hotel_user: UserProfile) -> dict:
    return headers_for(other_hotel_user)


@pytest_asyncio.fixture
async def consumer_headers(consumer_user: UserProfile) -> dict:
    return headers_for(consumer_user)


@pytest_asyncio.fixture
async def other_consumer_headers(other_consumer_user: UserProfile) -> dict:
    return headers_for(other_consumer_user)


@pytest_asyncio.fixture
async def admin_headers(admin_user: UserProfile) -> dict:
    return headers_for(admin_user)


def event_form(**overrides) -> EventCreate:
    data = {
        "title": "Jazz Night",
        "location": "Main Hall",
        "description": "Live jazz quartet",
        "image_url": "http://cdn.test/jazz.jpg",
        "categories": "Music, Entertainment",
    }
    data.update(overrides)
    return EventCreate(**data)


@pytest_asyncio.fixture
async def test_event(repos: Repositories, hotel: Principal) -> Event:
    """An active event owned by `hotel`."""
    return await create_event(repos, hotel, event_form())
