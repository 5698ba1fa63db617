"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.crypto import get_crypto_service
from database import Base, get_db
from main import app
from services.crypto_service import CryptoService
# Pytest fixtures - imported to make them available to tests
from tests.fixtures import (  # noqa: F401
    category,
    crypto_asset,
    custody,
    sector,
    user_id,
)
from tests.fixtures.mocks import FakeQuoteProvider, TEST_USER_ID


@pytest.fixture(name="db")
def db_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="quote_provider")
def quote_provider_fixture():
    """A fake CoinGecko client with BTC/ETH/USDT quotes and a 5.00 rate."""
    return FakeQuoteProvider()


@pytest.fixture(name="client")
def client_fixture(db, quote_provider):
    """Create a test client with the test database, sending the test user header."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    def override_get_crypto_service():
        return CryptoService(provider=quote_provider)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_crypto_service] = override_get_crypto_service
    client = TestClient(app, headers={"X-User-Id": TEST_USER_ID})
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="anonymous_client")
def anonymous_client_fixture(db):
    """Create a test client that sends no user header."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
