"""Shared fixtures for the Task Manager tests."""

import pytest
from fastapi.testclient import TestClient

from taskmanager.config import Settings
from taskmanager.main import create_app
from taskmanager.models import Review, Task, User
from taskmanager.repositories import InMemoryRepository
from taskmanager.services.reviews import ReviewStore
from taskmanager.services.session import Authenticator
from taskmanager.services.tasks import TaskStore

TEST_SECRET = "test-secret"


@pytest.fixture
def settings():
    return Settings(
        jwt_secret=TEST_SECRET,
        seed_demo_data=False,
        storage_backend="memory",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


def register(client, username="alice", email="a@x.com", password="pw123456"):
    """Register through the API and return ``(token, user)``."""
    response = client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    data = response.json()["data"]
    return data["token"], data["user"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice_headers(client):
    token, _ = register(client)
    return bearer(token)


@pytest.fixture
def task_store():
    return TaskStore(InMemoryRepository[Task]())


@pytest.fixture
def review_store(task_store):
    return ReviewStore(InMemoryRepository[Review](), task_store)


@pytest.fixture
def authenticator():
    return Authenticator(InMemoryRepository[User](), secret_key=TEST_SECRET)
