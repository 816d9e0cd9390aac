from typing import Callable, Dict, Iterator

import pytest
from fastapi.testclient import TestClient

import snipers.models  # noqa: F401
from snipers.core.config import Settings
from snipers.core.database import EntityStore
from snipers.main import create_app
from snipers.services.repository import Repository


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        seed_demo_data=False,
        scheduler_enabled=False,
        secret_key="test-secret",
        log_level="WARNING",
        _env_file=None,
    )


@pytest.fixture
def store() -> Iterator[EntityStore]:
    store = EntityStore()
    yield store
    store.dispose()


@pytest.fixture
def repo(store: EntityStore) -> Repository:
    return Repository(store)


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def registration_payload(username: str) -> Dict[str, str]:
    return {
        "username": username,
        "email": f"{username}@example.com",
        "name": username.title(),
        "phone": "+10000000000",
        "password": f"{username}-pass",
    }


@pytest.fixture
def make_user_client(app) -> Callable[[str], TestClient]:
    """Register ``username`` and return a client carrying its session cookie."""

    def _make(username: str) -> TestClient:
        user_client = TestClient(app)
        resp = user_client.post("/api/auth/complete-registration", json=registration_payload(username))
        assert resp.status_code == 200, resp.text
        return user_client

    return _make


@pytest.fixture
def alice(make_user_client) -> TestClient:
    return make_user_client("alice")


@pytest.fixture
def bob(make_user_client) -> TestClient:
    return make_user_client("bob")
