"""
Shared pytest fixtures for SmartStay Dashboard tests.

Provides:
- Isolated file-based SQLite database per test
- SQLAlchemyStoreClient bound to that database
- Mock StoreClient for EntityStore unit tests
- FastAPI TestClient with dependency overrides and signed access tokens
"""

import os
import tempfile
from pathlib import Path

# Settings are cached on first import; point them at throwaway locations
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="smartstay-tests-"))
os.environ.setdefault("SMARTSTAY_CONFIG_PATH", str(_TEST_ROOT / "config.yaml"))
os.environ.setdefault("SMARTSTAY_DATABASE_URL", f"sqlite:///{_TEST_ROOT / 'app.db'}")
os.environ.setdefault("SMARTSTAY_LOG_TO_FILE", "false")
os.environ.setdefault("SMARTSTAY_JWT_SECRET", "smartstay-test-secret-with-enough-length")
os.environ.setdefault("SMARTSTAY_RATE_LIMIT_PER_MINUTE", "10000")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from dashboard.database import Base
from dashboard.dependencies import get_store_client, reset_dependencies
from dashboard.main import app
from dashboard.middleware.auth import get_auth_client
from dashboard.services.auth import TokenAuthClient
from dashboard.services.store_client import SQLAlchemyStoreClient

from tests.fixtures.data import SAMPLE_HOTEL_ROW, SAMPLE_LINK_ROWS, TEST_JWT_SECRET
from tests.fixtures.factories import make_access_token, make_user
from tests.mocks.mock_store_client import create_mock_store_client


# ============================================
# Database Fixtures
# ============================================


@pytest.fixture(scope="function")
def test_engine(tmp_path):
    """
    Create an isolated SQLite database engine for each test.

    Uses a file-based database in tmp_path to avoid connection isolation
    issues with in-memory SQLite.
    """
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    return engine


@pytest.fixture(scope="function")
def session_factory(test_engine):
    """Create tables on the test engine and return a session factory"""
    from dashboard.models import hotel, link  # noqa: F401

    Base.metadata.create_all(bind=test_engine)
    yield sessionmaker(bind=test_engine, autocommit=False, autoflush=False)
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def test_db(session_factory) -> Generator[Session, None, None]:
    """Session on the isolated test database"""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store_client(session_factory) -> SQLAlchemyStoreClient:
    """Durable store client on the isolated test database"""
    return SQLAlchemyStoreClient(session_factory=session_factory)


# ============================================
# Store Client Mocking
# ============================================


@pytest.fixture
def mock_store_client():
    """Mock StoreClient for a tenant that has not saved branding yet"""
    return create_mock_store_client()


@pytest.fixture
def seeded_store_client():
    """Mock StoreClient holding the sample hotel and its three links"""
    return create_mock_store_client(hotel=SAMPLE_HOTEL_ROW, links=SAMPLE_LINK_ROWS)


# ============================================
# Authentication Fixtures
# ============================================


@pytest.fixture
def test_user():
    return make_user()


@pytest.fixture
def auth_client() -> TokenAuthClient:
    return TokenAuthClient(secret=TEST_JWT_SECRET)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """
    HTTP headers with a valid access token for the sample tenant.

    Usage:
        def test_endpoint(client, auth_headers):
            response = client.get("/api/v1/links", headers=auth_headers)
    """
    return {"Authorization": f"Bearer {make_access_token()}"}


# ============================================
# TestClient Fixtures
# ============================================


def _make_client(store_client_override, auth_client: TokenAuthClient) -> Generator[TestClient, None, None]:
    reset_dependencies()
    app.dependency_overrides[get_store_client] = lambda: store_client_override
    app.dependency_overrides[get_auth_client] = lambda: auth_client

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    reset_dependencies()


@pytest.fixture
def client(store_client, auth_client) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient backed by the isolated SQLite database.

    Each test starts without any editor sessions.
    """
    yield from _make_client(store_client, auth_client)


@pytest.fixture
def client_with_mock_store(seeded_store_client, auth_client) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient backed by the mock StoreClient (sample hotel + links).

    Use this to inject durable store failures into router tests.
    """
    yield from _make_client(seeded_store_client, auth_client)
