"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time; point them at the test database
# and a cheap bcrypt work factor before the app is imported.
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"].replace("/ev_stations", "/ev_stations_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from evstations.api.dependencies import get_email_service  # noqa: E402
from evstations.database import Base, get_db  # noqa: E402
from evstations.main import app  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's details."""

    def __init__(self, *args, user_id: int | None = None, email: str = "", token: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.token = token


class FakeEmailService:
    """Records outgoing password reset emails instead of sending them."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent: list[tuple[str, str]] = []

    def send_password_reset(self, to_email: str, reset_url: str) -> bool:
        self.sent.append((to_email, reset_url))
        return self.succeed

    @property
    def last_token(self) -> str:
        return self.sent[-1][1].rsplit("/", 1)[-1]


connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from evstations import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def mailer():
    """Fake email channel shared by the app and the test."""
    return FakeEmailService()


@pytest.fixture(scope="function")
def client(db, mailer):
    """Create a test client with database and email overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_user(client, name: str, email: str, password: str = "testpass123") -> AuthHeaders:
    """Register a user and return auth headers for them."""
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201
    token = response.json()["token"]

    headers = AuthHeaders({"Authorization": f"Bearer {token}"}, email=email, token=token)
    headers.user_id = client.get("/api/auth/me", headers=headers).json()["id"]
    return headers


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_user(client, "Test User", "test@example.com")


@pytest.fixture
def other_headers(client):
    """A second, unrelated user."""
    return register_user(client, "Other User", "other@example.com")


@pytest.fixture
def station_payload():
    return {
        "name": "Downtown Supercharger",
        "location": {"latitude": 52.52, "longitude": 13.405},
        "powerOutput": 150,
        "connectorType": "CCS2",
    }
