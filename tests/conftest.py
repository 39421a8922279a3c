"""Shared pytest fixtures for relay tests."""
import sys
sys.dont_write_bytecode = True

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from chatrelay.api.factory import create_app  # noqa: E402
from chatrelay.infra.settings import PROVIDER_ENV_VARS  # noqa: E402

from .helpers import (  # noqa: E402
    ADMIN_ENV,
    BASE_URL,
    PROVIDER_ENV,
    TEST_ADMIN_PASS,
    TEST_ADMIN_USER,
)


@pytest.fixture
def relay_env(monkeypatch, tmp_path):
    """Fully configured environment with data files under tmp_path."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    for name in ("CONFIG_FILE", "KNOWLEDGE_FILE", "EVENTS_FILE"):
        monkeypatch.delenv(name, raising=False)
    for name, value in {**PROVIDER_ENV, **ADMIN_ENV}.items():
        monkeypatch.setenv(name, value)
    return tmp_path


@pytest.fixture
def no_provider_env(relay_env, monkeypatch):
    """Admin auth configured, every provider credential missing."""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return relay_env


@pytest.fixture
def app(relay_env):
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app, base_url=BASE_URL)


@pytest.fixture
def admin_client(client):
    """Client holding a valid admin session cookie."""
    response = client.post("/api/login", json={"user": TEST_ADMIN_USER, "pass": TEST_ADMIN_PASS})
    assert response.status_code == 200
    return client


@pytest.fixture
def relay_state(app):
    return app.state.relay
