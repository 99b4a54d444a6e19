# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from wakemeup import config
from wakemeup.main import app

TEST_EMAIL = "traveller@example.com"
TEST_PASSWORD = "s3cret-pass"


@pytest.fixture
def db_url(tmp_path, monkeypatch):
    """Point the app at a throwaway SQLite file and make bcrypt cheap."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'wakemeup.db'}"
    monkeypatch.setattr(config, "DATABASE_URL", url)
    monkeypatch.setattr(config, "BCRYPT_ROUNDS", 4)
    return url


@pytest.fixture
def client(db_url):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def token(client):
    client.post("/api/auth/signup", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    response = client.post("/api/auth/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    return response.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
