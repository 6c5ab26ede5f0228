# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from main import create_app
from x12_settings import ServerSettings

TEST_SECRET = "s3cret-test-key"


@pytest.fixture
def settings() -> ServerSettings:
    return ServerSettings(api_secret=TEST_SECRET)


@pytest.fixture
def client(settings: ServerSettings) -> TestClient:
    """Client for an app with the API-key gate enabled."""
    return TestClient(create_app(settings))


@pytest.fixture
def open_client() -> TestClient:
    """Client for an app built without the API-key gate."""
    return TestClient(create_app(ServerSettings(api_secret=TEST_SECRET, require_api_key=False)))


@pytest.fixture
def auth_headers() -> dict:
    return {"X-API-KEY": TEST_SECRET}
