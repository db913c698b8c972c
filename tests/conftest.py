"""Pytest fixtures for the API tests.

Each test gets its own SQLite file. Tables are created through a plain sync
engine; the app talks to the same file through aiosqlite by overriding the
``get_db`` dependency. ``NullPool`` keeps connections from being shared across
the event loops TestClient spins up per request.
"""

import os
import tempfile

# Must be set before taskapi.config is imported
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "taskapi-tests.db"),
)
os.environ.setdefault("SECRET_KEY", "test-secret-for-testing-only")
os.environ["ERROR_LOG_FILE"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from taskapi.database import Base, get_db
from taskapi.main import app
from taskapi.models import tasks, token, user  # noqa: F401

PASSWORD = "secret"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test.db"


@pytest.fixture
def sync_engine(db_path):
    """Direct access to the test database, for setup and assertions."""
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def client(db_path, sync_engine):
    async_engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async def override_get_db():
        async with session_factory() as db:
            try:
                yield db
            except Exception:
                await db.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    def _register(name="Jane", email="jane@x.com", password=PASSWORD):
        response = client.post(
            "/register", json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 201, response.text
        return response.json()["user"]

    return _register


@pytest.fixture
def login(client):
    def _login(email, password=PASSWORD) -> dict:
        response = client.post("/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture
def jane(register, login):
    user = register("Jane", "jane@x.com")
    return {"user": user, "headers": login("jane@x.com")}


@pytest.fixture
def bob(register, login):
    user = register("Bob", "bob@y.com")
    return {"user": user, "headers": login("bob@y.com")}


@pytest.fixture
def query(sync_engine):
    def _query(statement: str, **params):
        with sync_engine.connect() as conn:
            return conn.execute(text(statement), params).fetchall()

    return _query


@pytest.fixture
def execute(sync_engine):
    def _execute(statement: str, **params) -> int:
        with sync_engine.begin() as conn:
            return conn.execute(text(statement), params).rowcount

    return _execute
