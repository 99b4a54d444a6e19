# tests/test_database.py
import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import make_url

from wakemeup import config
from wakemeup.main import app
from wakemeup.utils import database
from wakemeup.utils.database import database_url, dispose_database, init_database, server_url


def test_database_url_from_settings(monkeypatch):
    monkeypatch.setattr(config, "DATABASE_URL", None)
    monkeypatch.setattr(config, "DB_HOST", "db.internal")
    monkeypatch.setattr(config, "DB_PORT", 3307)
    monkeypatch.setattr(config, "DB_USER", "app")
    monkeypatch.setattr(config, "DB_PASSWORD", "#pw")
    monkeypatch.setattr(config, "DB_NAME", "trips")

    url = database_url()
    assert url.drivername == "mysql+aiomysql"
    assert (url.host, url.port, url.username, url.password, url.database) == ("db.internal", 3307, "app", "#pw", "trips")


def test_server_url_drops_database():
    url = make_url("mysql+aiomysql://root:pw@127.0.0.1:3306/wakemeup")
    bootstrap = server_url(url)
    assert bootstrap.database is None
    assert bootstrap.host == "127.0.0.1"
    assert bootstrap.username == "root"


def test_concurrent_init_builds_one_engine(db_url, monkeypatch):
    created = []
    real_create = database.create_async_engine

    def counting_create(*args, **kwargs):
        engine = real_create(*args, **kwargs)
        created.append(engine)
        return engine

    monkeypatch.setattr(database, "create_async_engine", counting_create)

    async def scenario():
        try:
            engines = await asyncio.gather(*(init_database() for _ in range(5)))
            return engines
        finally:
            await dispose_database()

    engines = asyncio.run(scenario())
    assert len(created) == 1
    assert all(engine is engines[0] for engine in engines)


def test_table_creation_is_idempotent(db_url):
    async def scenario():
        await init_database()
        await dispose_database()
        # second bootstrap against the same file finds the tables already there
        engine = await init_database()
        await dispose_database()
        return engine

    assert asyncio.run(scenario()) is not None


def test_startup_fails_when_database_unreachable(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'x.db'}")
    with pytest.raises(Exception):
        with TestClient(app):
            pass
    assert database._state.engine is None


def test_debug_tables(client):
    response = client.get("/api/debug/tables")
    assert response.status_code == 200
    assert {"users", "destinations"} <= set(response.json())


def test_debug_users_lists_newest_first(client):
    client.post("/api/auth/signup", json={"email": "one@example.com", "password": "pw"})
    client.post("/api/auth/signup", json={"email": "two@example.com", "password": "pw"})
    rows = client.get("/api/debug/users").json()
    assert [row["email"] for row in rows] == ["two@example.com", "one@example.com"]
    assert "password_hash" not in rows[0]


def test_debug_config_hides_credentials(client, db_url):
    body = client.get("/api/debug/config").json()
    assert set(body) == {"host", "port", "database"}
    assert body["database"] == make_url(db_url).database
