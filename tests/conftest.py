import pytest
import uuid
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from jose import jwt

from gallery.main import app
from gallery.core.config import settings
from gallery.db.session import create_schema, get_sessionmaker

API_PATH = settings.API_PATH
TEST_SECRET = "test-identity-secret-32-chars-ok!"


# ── Token helper ────────────────────────────────────────────────────────────────

def make_token(
    email: str = "admin@example.com",
    secret: str = TEST_SECRET,
    expired: bool = False,
) -> str:
    exp = datetime.now(timezone.utc) + (
        timedelta(seconds=-1) if expired else timedelta(hours=1)
    )
    return jwt.encode(
        {"sub": str(uuid.uuid4()), "email": email, "exp": exp}, secret, algorithm="HS256"
    )


def auth_headers(email: str = "admin@example.com") -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(email)}"}


# ── Database fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file with the authors table created."""
    url = f"sqlite:///{tmp_path / 'gallery.db'}"
    monkeypatch.setattr(settings, "DATABASE_URL", url)
    monkeypatch.setattr(settings, "IDENTITY_JWT_SECRET", None)
    create_schema(url)
    return url


@pytest.fixture
def no_database(monkeypatch):
    """Simulate a deployment without DATABASE_URL."""
    monkeypatch.setattr(settings, "DATABASE_URL", None)
    monkeypatch.setattr(settings, "IDENTITY_JWT_SECRET", None)


@pytest.fixture
def session_required(monkeypatch, database_url):
    """Turn on the server-side session check."""
    monkeypatch.setattr(settings, "IDENTITY_JWT_SECRET", TEST_SECRET)
    return TEST_SECRET


@pytest.fixture
def db_session(database_url):
    """Create a fresh database session for each test."""
    session = get_sessionmaker(database_url)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def test_client(database_url):
    """Create a test client for FastAPI app."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def author_data():
    return {
        "name": "Abai",
        "birthDate": "1845",
        "deathDate": "1904",
        "biography": "Poet, composer and philosopher.",
        "imageUrl": "data:image/png;base64,iVBORw0KGgo=",
    }


@pytest.fixture
def sample_author(test_client, author_data):
    """Create a sample author through the API."""
    response = test_client.post(API_PATH, json=author_data)
    assert response.status_code == 201, f"Failed to create sample author: {response.text}"
    return response.json()


@pytest.fixture
def headers_with_correlation():
    """HTTP headers with correlation ID."""
    return {"X-Request-ID": str(uuid.uuid4())}
