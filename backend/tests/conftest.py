"""Pytest configuration and fixtures for testing."""
import asyncio
import os
import tempfile

# Settings are cached on first import, so the environment is set up first
_TEST_DIR = tempfile.mkdtemp(prefix="portal-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/portal_test.db"
os.environ["DOCUMENT_STORE_URL"] = ""
os.environ["MAXIMO_API_URL"] = ""
os.environ["SEED_MOCK_DATA"] = "false"
os.environ["SIMULATED_LATENCY_MS"] = "0"

import pytest
from fastapi.testclient import TestClient

from portal.core.page_cache import page_cache
from portal.database import AsyncSessionLocal, drop_db, init_db
from portal.main import app
from portal.services.seed_data import seed_all

from fakes import FailingDocumentStore, InMemoryDocumentStore


@pytest.fixture(autouse=True)
def clear_page_cache():
    page_cache.clear()
    yield
    page_cache.clear()


@pytest.fixture
async def db():
    """Create a fresh local cache for each test."""
    await init_db()
    async with AsyncSessionLocal() as session:
        yield session
    await drop_db()


@pytest.fixture
async def seeded_db(db):
    """Local cache holding the initial portal data."""
    await seed_all(db)
    return db


@pytest.fixture
def remote_store(monkeypatch):
    """Route every collection through an in-memory document store."""
    store = InMemoryDocumentStore()
    monkeypatch.setattr("portal.stores.get_document_store", lambda: store)
    return store


@pytest.fixture
def failing_store(monkeypatch):
    """Route every collection through an unreachable document store."""
    store = FailingDocumentStore()
    monkeypatch.setattr("portal.stores.get_document_store", lambda: store)
    return store


async def _seed():
    await init_db()
    async with AsyncSessionLocal() as session:
        await seed_all(session)


@pytest.fixture
def client():
    """Test client over a freshly seeded local cache."""
    asyncio.run(_seed())
    with TestClient(app) as test_client:
        yield test_client
    asyncio.run(drop_db())
