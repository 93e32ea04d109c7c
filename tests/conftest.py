"""Pytest configuration and fixtures."""
import os

# Settings are read at import time; give tests a working default environment
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret-key")

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from app.main import app
from app.config import settings
from app.utils.sections import default_sections, default_strategy_sheet


@pytest.fixture
def mock_collection():
    """Motor collection mock: async methods awaitable, find() returns a cursor."""
    collection = AsyncMock()
    collection.find = MagicMock()
    collection.aggregate = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    """Database mock returning the same collection for every name."""
    db = MagicMock()
    db.__getitem__.return_value = mock_collection
    return db


def make_cursor(docs):
    """Cursor mock supporting sort()/limit() chaining and to_list()."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=docs)
    return cursor


def make_board_doc(**overrides):
    """A stored vision board document with empty, scaffolded sections."""
    now = datetime.now(timezone.utc)
    doc = {
        "_id": ObjectId(),
        "user_id": "user123",
        "name": "Growth Plan 2026",
        "is_active": True,
        "overall_progress": 0,
        "sections": default_sections(),
        "strategy_sheet": default_strategy_sheet(),
        "archived_at": None,
        "created_at": now,
        "updated_at": now,
    }
    doc.update(overrides)
    return doc


@pytest_asyncio.fixture
async def app_client():
    """
    Create a test client with a clean test database.

    This fixture:
    - Skips when no MongoDB server is reachable
    - Yields an async HTTP client for testing
    - Drops the test database after each test
    """
    test_client = AsyncIOMotorClient(settings.mongodb_url, serverSelectionTimeoutMS=2000)
    try:
        await test_client.admin.command("ping")
    except PyMongoError:
        test_client.close()
        pytest.skip("MongoDB is not available")

    test_db_name = f"{settings.mongodb_db_name}_test"
    test_db = test_client[test_db_name]

    # Override the database dependency
    from app.database import database, ensure_indexes
    original_db = database.db
    database.db = test_db
    await ensure_indexes(test_db)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    # Cleanup: drop test database
    await test_client.drop_database(test_db_name)

    # Restore original database
    database.db = original_db
    test_client.close()


@pytest_asyncio.fixture
async def auth_headers(app_client):
    """Register a user and return bearer headers for it."""
    await app_client.post(
        "/auth/register",
        json={"email": "owner@example.com", "password": "password123", "name": "Board Owner"},
    )
    login_response = await app_client.post(
        "/auth/login",
        json={"email": "owner@example.com", "password": "password123"},
    )
    token = login_response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def board_doc_factory():
    """Factory for stored vision board documents."""
    return make_board_doc


@pytest.fixture
def cursor_factory():
    """Factory for Motor cursor mocks."""
    return make_cursor
