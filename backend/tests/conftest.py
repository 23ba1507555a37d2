"""Test fixtures."""

import os
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app
os.environ.pop("DATABASE_URL", None)
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from panel.core.clock import utcnow  # noqa: E402
from panel.core.config import Settings  # noqa: E402
from panel.core.limiter import limiter  # noqa: E402
from panel.main import create_app  # noqa: E402
from panel.storage.memory import MemoryStorage  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpass"


class FakeClock:
    """Controllable clock; starts at the real current time."""

    def __init__(self, start=None):
        self.now = start or utcnow()

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(
        secret_key="test-secret-key",
        first_superuser="admin",
        first_superuser_email=ADMIN_EMAIL,
        first_superuser_password=ADMIN_PASSWORD,
        rate_limit_enabled=False,
        scheduler_enabled=False,
        log_level="WARNING",
    )


@pytest.fixture
def storage(clock):
    return MemoryStorage(clock=clock)


@pytest.fixture
def app(settings, storage):
    app = create_app(settings, storage)
    yield app
    limiter.reset()
    limiter.enabled = False


def login(client, email, password, **extra):
    return client.post("/api/auth/login", json={"email": email, "password": password, **extra})


def register(client, username, password="secret123"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_client(app):
    with TestClient(app) as c:
        assert login(c, ADMIN_EMAIL, ADMIN_PASSWORD).status_code == 200
        yield c


@pytest.fixture
def make_user_client(app):
    """Register a user and return a client logged in as them."""
    clients = []

    def factory(username):
        c = TestClient(app)
        c.__enter__()
        clients.append(c)
        assert register(c, username).status_code == 201
        assert login(c, f"{username}@example.com", "secret123").status_code == 200
        return c

    yield factory
    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def user_client(make_user_client):
    return make_user_client("alice")


@pytest.fixture
def other_client(make_user_client):
    return make_user_client("mallory")
