"""
Shared pytest fixtures.

The API is exercised against the in-memory store from tests/fakes.py, so
no MongoDB server is needed.
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep test runs away from real credentials
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DB_NAME"] = "movieDB_test"
os.environ["LOG_LEVEL"] = "WARNING"

from tests.fakes import FakeStore  # noqa: E402


@pytest.fixture
def fake_store():
    store = FakeStore()
    store.favorites.unique_indexes.append(("movieId", "userEmail"))
    return store


@pytest.fixture
def app(fake_store):
    """The FastAPI app with the store dependency pointed at the in-memory store."""
    from movie_portal.api.deps import get_store
    from movie_portal.server import app as application

    application.dependency_overrides[get_store] = lambda: fake_store
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight to the app (lifespan is not run,
    so no real MongoDB connection is attempted).
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
