"""Shared fixtures: a fresh in-memory database and API client per test."""
import pytest
from fastapi.testclient import TestClient

from petcare.core.config import Settings
from petcare.main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret_key="test-secret-key-with-at-least-32-bytes",
        password_iterations=1000,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register_user(client):
    """Register an account and return (auth headers, user payload)."""
    counter = {"n": 0}

    def _register(name: str = "Owner", email: str | None = None, password: str = "secret123"):
        counter["n"] += 1
        email = email or f"owner{counter['n']}@example.com"
        r = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert r.status_code == 201, r.text
        body = r.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]

    return _register


@pytest.fixture
def owner(register_user):
    headers, _ = register_user(name="Alice")
    return headers


@pytest.fixture
def stranger(register_user):
    headers, _ = register_user(name="Mallory")
    return headers


@pytest.fixture
def pet_id(client, owner) -> str:
    r = client.post(
        "/api/pets",
        json={"name": "Coco", "species": "dog", "ageInMonths": 18},
        headers=owner,
    )
    assert r.status_code == 201, r.text
    return r.json()["id"]
