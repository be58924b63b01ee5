"""
Pytest configuration and shared fixtures.

Every test gets a fresh in-memory SQLite document store (tables created from
SQLModel.metadata) and a LocalBlobStore rooted in the test's tmp_path. Both are
injected into the app through dependency_overrides, the same seam the
lifespan uses in production.
"""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from maskshare.core.database import create_engine, create_session_factory, create_tables, get_db
from maskshare.core.storage import LocalBlobStore, get_blob_store
from maskshare.main import app as main_app
from maskshare.models import Masks, Users
from tests.helpers import create_mask, create_user

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a test database engine for each test function.

    StaticPool keeps the single in-memory connection alive, so every session
    opened during the test sees the same database.
    """
    test_engine = create_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(test_engine)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture(scope="function")
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging and inspecting test data."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def blob_store(tmp_path: Path) -> LocalBlobStore:
    store = LocalBlobStore(tmp_path / "blobs", "http://test")
    store.ensure_dirs()
    return store


@pytest.fixture(scope="function")
def app(
    session_factory: async_sessionmaker[AsyncSession], blob_store: LocalBlobStore
) -> Generator[FastAPI, None, None]:
    """
    FastAPI app wired to the test database and blob store.

    Each request gets its own session, like in production.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    main_app.dependency_overrides[get_db] = override_get_db
    main_app.dependency_overrides[get_blob_store] = lambda: blob_store

    yield main_app

    main_app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing API endpoints.

    Usage:
        async def test_endpoint(client):
            response = await client.get("/api/v1/masks")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
async def test_user(db_session: AsyncSession) -> Users:
    """A user allowed to upload, rate and comment."""
    return await create_user(db_session)


@pytest.fixture
async def test_mask(db_session: AsyncSession, test_user: Users) -> Masks:
    """Mask 0, uploaded by test_user."""
    return await create_mask(db_session, 0, uploader_google_id=test_user.google_id)


@pytest.fixture
def sample_mask_data() -> dict:
    """Sample createMask payload."""
    return {
        "maskUrl": "https://cdn.example.com/masks/fox.json",
        "name": "Fox",
        "description": "A red fox",
        "images": ["https://cdn.example.com/masks/fox.png"],
        "tags": ["animal", "red"],
        "uploaderGoogleId": "google-uploader",
    }
