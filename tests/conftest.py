import uuid

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from dataBase import get_db
from main import app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def mock_db():
    # A fresh database name per test keeps counters and documents isolated.
    return AsyncMongoMockClient()[f"xchange_test_{uuid.uuid4().hex}"]


@pytest.fixture
def client(mock_db):
    app.dependency_overrides[get_db] = lambda: mock_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    def _register(username, password="secret", **extra):
        response = client.post(
            "/api/users/register",
            json={"username": username, "password": password, **extra},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _register


@pytest.fixture
def list_object(client):
    def _list_object(owner_id, name="item"):
        response = client.post("/api/objects", json={"name": name, "owner_id": owner_id})
        assert response.status_code == 200, response.text
        return response.json()

    return _list_object


@pytest.fixture
def marketplace(register, list_object):
    """Two users, each owning one object."""
    alice = register("alice")
    bob = register("bob")
    return {
        "alice": alice,
        "bob": bob,
        "bike": list_object(alice["id"], "bike"),
        "guitar": list_object(bob["id"], "guitar"),
    }
