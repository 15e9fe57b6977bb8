"""
Centralized Test Configuration.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from parcel_tracker.app.main import app
from parcel_tracker.app.core.dependencies import get_parcel_store
from parcel_tracker.app.db.session import Base, create_schema
from parcel_tracker.app.services.parcel_store import ParcelStore
from parcel_tracker.app.services.parcel_service import ParcelService
from parcel_tracker.tests.factories import TEST_DATABASE_URL


@pytest.fixture
async def engine():
    """In-memory engine with the schema created; dropped after each test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_schema(test_engine)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def store(engine):
    return ParcelStore(engine)


@pytest.fixture
def service(store):
    return ParcelService(store)


@pytest.fixture
async def client(store):
    """Async client for testing, with the store bound to the test engine."""
    async def override_get_parcel_store():
        return store

    app.dependency_overrides[get_parcel_store] = override_get_parcel_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}
