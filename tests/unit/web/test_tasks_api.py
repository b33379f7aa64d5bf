"""Tests for the HTTP surface, wired to in-memory stores."""

import pytest
from fastapi.testclient import TestClient

from tasklist.app import App
from tasklist.web.server import create_fastapi_app


@pytest.fixture
def client(core, config):
    with TestClient(create_fastapi_app(App(core), config)) as client:
        yield client


@pytest.fixture
def logged_in(client):
    """Client holding a session cookie for alice."""
    assert client.post("/api/v1/auth/register", json={"username": "alice", "password": "secret"}).status_code == 201
    response = client.post("/api/v1/auth/login", json={"username": "alice", "password": "secret"})
    assert response.status_code == 200
    return client


class TestAuth:
    """Tests for login, logout and the session gate over HTTP."""

    def test_lifespan_starts_stores(self, client, ledger, task_repository):
        assert ledger.started
        assert task_repository.started

    def test_login_sets_cookie_with_ttl(self, client):
        client.post("/api/v1/auth/register", json={"username": "alice", "password": "secret"})

        response = client.post("/api/v1/auth/login", json={"username": "alice", "password": "secret"})

        assert response.json()["token"]
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("session_id=")
        assert "Max-Age=300" in set_cookie
        assert "HttpOnly" in set_cookie

    def test_login_wrong_password(self, client):
        client.post("/api/v1/auth/register", json={"username": "alice", "password": "secret"})

        response = client.post("/api/v1/auth/login", json={"username": "alice", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["type"] == "authentication_error"

    def test_register_over_long_password(self, client):
        response = client.post("/api/v1/auth/register", json={"username": "alice", "password": "x" * 100})

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_login_over_long_password(self, client):
        client.post("/api/v1/auth/register", json={"username": "alice", "password": "secret"})

        response = client.post("/api/v1/auth/login", json={"username": "alice", "password": "x" * 100})

        assert response.status_code == 401

    def test_register_duplicate(self, client):
        client.post("/api/v1/auth/register", json={"username": "alice", "password": "secret"})

        response = client.post("/api/v1/auth/register", json={"username": "alice", "password": "secret"})

        assert response.status_code == 400

    def test_tasks_require_session(self, client):
        response = client.get("/api/v1/tasks")

        assert response.status_code == 401
        assert response.json()["type"] == "authentication_error"

    def test_unknown_token_rejected(self, client):
        response = client.get("/api/v1/tasks", headers={"Authorization": "Bearer forged"})

        assert response.status_code == 401

    def test_bearer_token_accepted(self, client):
        client.post("/api/v1/auth/register", json={"username": "bob", "password": "secret"})
        token = client.post("/api/v1/auth/login", json={"username": "bob", "password": "secret"}).json()["token"]
        client.cookies.clear()

        response = client.get("/api/v1/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"username": "bob"}

    def test_session_window(self, logged_in, clock, ledger):
        """Test that a request at 4m59s passes and one at 5m01s is rejected and torn down."""
        clock.advance(minutes=4, seconds=59)
        assert logged_in.get("/api/v1/tasks").status_code == 200

        clock.advance(seconds=2)
        response = logged_in.get("/api/v1/tasks")

        assert response.status_code == 401
        assert response.json()["type"] == "session_expired"
        assert ledger.sessions == {}

        # Torn down, so the next attempt is a plain unknown token
        assert logged_in.get("/api/v1/tasks").json()["type"] == "authentication_error"

    def test_logout(self, logged_in, ledger):
        response = logged_in.post("/api/v1/auth/logout")

        assert response.status_code == 204
        assert ledger.sessions == {}
        assert logged_in.get("/api/v1/tasks").status_code == 401

    def test_logout_without_session(self, client):
        assert client.post("/api/v1/auth/logout").status_code == 204

    def test_ledger_outage_is_503(self, logged_in, ledger):
        ledger.available = False

        response = logged_in.get("/api/v1/tasks")

        assert response.status_code == 503
        assert response.json()["type"] == "storage_unavailable"


class TestTasks:
    """Tests for task CRUD over HTTP."""

    def test_empty_list(self, logged_in):
        response = logged_in.get("/api/v1/tasks")

        assert response.status_code == 200
        assert response.json() == []

    def test_create_and_list(self, logged_in):
        first = logged_in.post("/api/v1/tasks", json={"description": "Buy milk"})
        second = logged_in.post("/api/v1/tasks", json={"description": "Walk dog"})

        assert first.status_code == 201
        assert first.json() == {"id": 1, "description": "Buy milk"}
        assert second.json()["id"] == 2
        assert logged_in.get("/api/v1/tasks").json() == [
            {"id": 1, "description": "Buy milk"},
            {"id": 2, "description": "Walk dog"},
        ]

    def test_deleted_id_reused(self, logged_in):
        """Test that alice deletes task 1 of {1, 2} and the next task is numbered 1."""
        logged_in.post("/api/v1/tasks", json={"description": "one"})
        logged_in.post("/api/v1/tasks", json={"description": "two"})

        assert logged_in.delete("/api/v1/tasks/1").status_code == 204
        response = logged_in.post("/api/v1/tasks", json={"description": "three"})

        assert response.json() == {"id": 1, "description": "three"}

    def test_ids_are_per_user(self, logged_in, task_repository):
        task_repository.add("bob", 1, 2, 3)

        response = logged_in.post("/api/v1/tasks", json={"description": "mine"})

        assert response.json()["id"] == 1

    def test_get_and_update(self, logged_in):
        logged_in.post("/api/v1/tasks", json={"description": "draft"})

        response = logged_in.put("/api/v1/tasks/1", json={"description": "final"})

        assert response.status_code == 200
        assert logged_in.get("/api/v1/tasks/1").json() == {"id": 1, "description": "final"}

    def test_other_users_task_not_found(self, logged_in, task_repository):
        task_repository.add("bob", 1)

        assert logged_in.get("/api/v1/tasks/1").status_code == 404
        assert logged_in.put("/api/v1/tasks/1", json={"description": "x"}).status_code == 404
        assert logged_in.delete("/api/v1/tasks/1").status_code == 404

    def test_blank_description_rejected(self, logged_in):
        response = logged_in.post("/api/v1/tasks", json={"description": "   "})

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_missing_description_rejected(self, logged_in):
        assert logged_in.post("/api/v1/tasks", json={}).status_code == 422

    def test_non_positive_id_rejected(self, logged_in):
        assert logged_in.get("/api/v1/tasks/0").status_code == 422
