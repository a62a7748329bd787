"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from authcore.config import Settings
from authcore.database import get_db
from authcore.main import app
from authcore.models.user import User


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime.now(UTC)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


def register_user(
    test_client: TestClient,
    email: str = "a@x.com",
    password: str = "pw1-secret",
    **fields,
) -> str:
    """Register a user through the API and return the session token."""
    payload = {
        "first_name": "Ada",
        "last_name": "Obi",
        "email": email,
        "password": password,
        "phone": "08030000000",
        **fields,
    }
    response = test_client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    User.__table__.create(engine, checkfirst=True)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session_maker(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(db_session_maker):
    session = db_session_maker()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        jwt_secret_key="test-secret-key",
        jwt_expire_days=30,
        reset_token_expire_minutes=10,
        bvn_code_expire_minutes=10,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth_client(db_session_maker):
    """Create test client backed by an in-memory database.

    Yields a tuple of (TestClient, SessionMaker) for use in tests.
    """

    def override_get_db():
        session = db_session_maker()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client, db_session_maker

    app.dependency_overrides.clear()


@pytest.fixture
def mock_email():
    with patch("authcore.services.email_service.EmailService.send") as mock_send:
        mock_send.return_value = True
        yield mock_send
