"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from auth import repository as auth_repository
from auth import security
from main import app

USER_UUID = "2c0dbb6e-3c5c-4d3c-9d61-6b8a7c8b6a01"


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "test-secret-0123456789abcdef0123456789")
    monkeypatch.setenv("CACHE_REST_URL", "https://cache.test")
    monkeypatch.setenv("CACHE_REST_TOKEN", "cache-token")
    monkeypatch.setenv("WHITEBOARD_BASE_URL", "https://whiteboard.test/v5")
    monkeypatch.setenv("WHITEBOARD_SDK_TOKEN", "NETLESSSDK_test")


@pytest.fixture
def known_user(monkeypatch):
    async def get_user_by_uuid(user_uuid):
        if user_uuid == USER_UUID:
            return {"user_uuid": USER_UUID, "user_name": "tester", "avatar_url": ""}
        return None

    monkeypatch.setattr(auth_repository, "get_user_by_uuid", get_user_by_uuid)
    return USER_UUID


@pytest.fixture
def auth_headers(known_user):
    token = security.build_access_token(user_uuid=known_user, login_source="Github")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client():
    # Unhandled errors are rendered by the catch-all handler; don't re-raise them here.
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
