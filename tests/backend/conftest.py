"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for testing
routes, repositories and the persistence client.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from records_api.database.connections import PersistenceClient
from records_api.repositories.account_repository import AccountRepository
from records_api.repositories.record_repository import RecordRepository


# =============================================================================
# Repository Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def record_repository(persistence) -> RecordRepository:
    """RecordRepository over the connected fake deployment."""
    return RecordRepository(persistence)


@pytest_asyncio.fixture
async def account_repository(persistence) -> AccountRepository:
    """AccountRepository over the connected fake deployment."""
    return AccountRepository(persistence)


@pytest.fixture
def mock_persistence():
    """
    A PersistenceClient stand-in whose collection is a MagicMock.

    Configure driver behavior on ``mock_persistence.collection.return_value``.
    """
    persistence = MagicMock(spec=PersistenceClient)
    collection = MagicMock()
    collection.find_one = AsyncMock()
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.count_documents = AsyncMock()
    persistence.collection.return_value = collection
    return persistence


# =============================================================================
# Async Helpers
# =============================================================================

@pytest.fixture
def wait_for():
    """
    Helper to poll a condition inside async tests.

    Usage:
        await wait_for(lambda: persistence.is_connected)
    """
    async def _wait(condition, timeout: float = 2.0, interval: float = 0.005):
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not condition():
            if loop.time() > deadline:
                raise AssertionError("condition not met before timeout")
            await asyncio.sleep(interval)
    return _wait


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, message_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "message" in data
        if message_contains:
            assert message_contains.lower() in data["message"].lower()
    return _assert
