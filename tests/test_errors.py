"""Error responses and the per-request session lifecycle."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from taskapi import database
from taskapi.main import app
from taskapi.services import tasks as task_service


class TestUnhandledErrors:
    def test_unexpected_exception_returns_500(self, client, jane, monkeypatch, caplog):
        async def broken_list_tasks(db, *, owner_id):
            raise RuntimeError("database exploded")

        monkeypatch.setattr(task_service, "list_tasks", broken_list_tasks)
        no_raise_client = TestClient(app, raise_server_exceptions=False)

        with caplog.at_level(logging.ERROR, logger="taskapi.main"):
            response = no_raise_client.get("/tasks", headers=jane["headers"])

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}
        assert "database exploded" not in response.text
        assert any("Unhandled error on GET /tasks" in r.getMessage() for r in caplog.records)


class TestMalformedBody:
    def test_invalid_json_is_reported_on_body(self, client, jane):
        response = client.post(
            "/tasks",
            content=b'{"title": ',
            headers={**jane["headers"], "Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert list(response.json()["errors"]) == ["body"]

    def test_missing_body(self, client, jane):
        response = client.post("/tasks", headers=jane["headers"])

        assert response.status_code == 422
        assert list(response.json()["errors"]) == ["body"]


@pytest.fixture
def fake_session(monkeypatch):
    session = MagicMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    monkeypatch.setattr(database, "AsyncSessionLocal", lambda: session)
    return session


class TestGetDb:
    def test_rolls_back_and_closes_on_error(self, fake_session):
        async def drive():
            gen = database.get_db()
            db = await gen.__anext__()
            assert db is fake_session
            with pytest.raises(RuntimeError):
                await gen.athrow(RuntimeError("boom"))

        asyncio.run(drive())

        fake_session.rollback.assert_awaited_once()
        fake_session.close.assert_awaited()

    def test_closes_without_rollback_on_success(self, fake_session):
        async def drive():
            gen = database.get_db()
            await gen.__anext__()
            with pytest.raises(StopAsyncIteration):
                await gen.__anext__()

        asyncio.run(drive())

        fake_session.rollback.assert_not_awaited()
        fake_session.close.assert_awaited()
