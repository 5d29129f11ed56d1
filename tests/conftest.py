"""
Global test fixtures for the Records API.

This module provides shared fixtures for all tests including:
- A fake MongoDB deployment (mongomock-motor) whose availability can be toggled
- A connected PersistenceClient
- Test settings, the FastAPI app and a TestClient
- Record payload and bearer token helpers
"""

import sys
from pathlib import Path
from typing import Any, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from records_api.config import Settings  # noqa: E402
from records_api.core.security import create_access_token  # noqa: E402
from records_api.database.connections import PersistenceClient  # noqa: E402
from records_api.database.registry import create_indexes  # noqa: E402

TEST_ACCOUNT_ID = "507f1f77bcf86cd799439011"


# =============================================================================
# Fake MongoDB deployment
# =============================================================================

class FakeAdminDatabase:
    """The ``admin`` database of a fake client; only answers ``ping``."""

    def __init__(self, server: "FakeMongoServer"):
        self.server = server

    async def command(self, name: str, *args, **kwargs) -> dict:
        if not self.server.available:
            raise ServerSelectionTimeoutError("fake MongoDB server is unavailable")
        return {"ok": 1.0}


class FakeMongoClient:
    """Stands in for AsyncIOMotorClient; data lives on the shared server."""

    def __init__(self, server: "FakeMongoServer", uri: str, **options: Any):
        self.server = server
        self.uri = uri
        self.options = options
        self.closed = False
        self.admin = FakeAdminDatabase(server)

    def __getitem__(self, name: str):
        return self.server.backend[name]

    def close(self) -> None:
        self.closed = True


class FakeMongoServer:
    """
    In-memory MongoDB backed by mongomock-motor.

    Data survives reconnects because every client built by ``client_factory``
    shares the same backend. Set ``available = False`` to make pings fail.
    """

    def __init__(self):
        self.backend = AsyncMongoMockClient()
        self.available = True
        self.clients: list[FakeMongoClient] = []

    def client_factory(self, uri: str, **options: Any) -> FakeMongoClient:
        client = FakeMongoClient(self, uri, **options)
        self.clients.append(client)
        return client


@pytest.fixture
def fake_mongo() -> FakeMongoServer:
    """A fresh fake MongoDB deployment."""
    return FakeMongoServer()


# =============================================================================
# Settings & Persistence Fixtures
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: fake URI, fixed secret, fast reconnects."""
    return Settings(
        _env_file=None,
        mongodb_uri="mongodb://fake-mongo:27017",
        mongodb_database="records_test_db",
        mongo_reconnect_delay_seconds=0.01,
        mongo_heartbeat_interval_seconds=3600,
        jwt_secret_key="test-secret-key-for-records-api",
        jwt_access_token_expire_minutes=30,
    )


@pytest_asyncio.fixture
async def persistence(fake_mongo, test_settings):
    """A started PersistenceClient connected to the fake deployment."""
    client = PersistenceClient.from_settings(
        test_settings,
        client_factory=fake_mongo.client_factory,
    )
    client.add_connect_hook(create_indexes)
    await client.start()
    yield client
    await client.close()


# =============================================================================
# Record Fixtures
# =============================================================================

@pytest.fixture
def record_payload() -> dict:
    """A valid create-record request body."""
    return {
        "name": "Jane Doe",
        "dateOfDeath": "2023-01-01",
        "ssn": "123-45-6789",
    }


@pytest.fixture
def full_record_payload() -> dict:
    """A create-record request body with every optional field set."""
    return {
        "name": "John Roe",
        "dateOfDeath": "2022-06-15",
        "ssn": "987-65-4321",
        "status": "verified",
        "documentVerified": True,
        "medicalNotes": "Cardiac arrest",
        "verifiedBy": "Dr. Smith",
    }


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(test_settings, fake_mongo):
    """
    Create the FastAPI app wired to the fake MongoDB deployment.
    """
    from records_api.main import create_app

    persistence = PersistenceClient.from_settings(
        test_settings,
        client_factory=fake_mongo.client_factory,
    )
    return create_app(settings=test_settings, persistence=persistence)


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Entering the context runs the lifespan, so the app is connected.
    """
    with TestClient(app) as c:
        yield c


# =============================================================================
# Authentication Fixtures
# =============================================================================

@pytest.fixture
def auth_token(test_settings) -> str:
    """A valid bearer token signed with the test secret."""
    return create_access_token(TEST_ACCOUNT_ID, settings=test_settings)


@pytest.fixture
def auth_headers(auth_token) -> dict:
    """Authorization header carrying a valid bearer token."""
    return {"Authorization": f"Bearer {auth_token}"}
