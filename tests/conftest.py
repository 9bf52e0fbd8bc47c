"""
Shared pytest fixtures for user management tests.
"""
import json
import os
from typing import Dict, List
from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import unquote

import httpx
import pytest

from user_management.core.config import reset_settings
from user_management.infrastructure.external.user_api_client import UserApiClient


BASE_URL = "http://users.test/api/users"
BASE_PATH = "/api/users"


class FakeUserApi:
    """In-memory user API served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.users: Dict[str, dict] = {}
        self.requests: List[httpx.Request] = []
        self._next_id = 1

    def add(self, firstname: str, lastname: str, age: int) -> str:
        user_id = f"u{self._next_id}"
        self._next_id += 1
        self.users[user_id] = {
            "id": user_id,
            "firstname": firstname,
            "lastname": lastname,
            "age": age,
        }
        return user_id

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.rstrip("/")

        if path == BASE_PATH:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.users.values()))
            if request.method == "POST":
                body = json.loads(request.content)
                self.add(body["firstname"], body["lastname"], body["age"])
                return httpx.Response(201, text="User created successfully")
            return httpx.Response(405, json={"message": "Method not allowed"})

        user_id = unquote(path[len(BASE_PATH) + 1:])
        user = self.users.get(user_id)
        if user is None:
            return httpx.Response(404, json={"message": "User not found"})
        if request.method == "GET":
            return httpx.Response(200, json=user)
        if request.method == "PATCH":
            user.update(json.loads(request.content))
            return httpx.Response(200, json={"message": "User updated successfully"})
        if request.method == "DELETE":
            del self.users[user_id]
            return httpx.Response(200, text="User deleted successfully")
        return httpx.Response(405, json={"message": "Method not allowed"})


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings from the environment for every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "USER_API_BASE_URL": BASE_URL,
        "NOTICE_AUTO_CLEAR_SECONDS": "5",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings():
    """Fixture to mock get_settings for tests. Patches all modules that use it."""
    mock = MagicMock()
    mock.user_api_base_url = BASE_URL
    mock.user_api_timeout = None
    mock.user_api_require_base_url = False
    mock.notice_auto_clear_seconds = 5.0
    mock.cors_allow_origins = ["http://localhost:5173"]

    # Patch at source and at use sites (modules import get_settings at load time)
    with patch("user_management.core.config.get_settings", return_value=mock), patch(
        "user_management.infrastructure.external.base_api_client.get_settings",
        return_value=mock,
    ):
        yield mock


@pytest.fixture
def fake_api():
    return FakeUserApi()


@pytest.fixture
def api_client(fake_api):
    """UserApiClient talking to the in-memory fake API."""
    return UserApiClient(base_url=BASE_URL, transport=httpx.MockTransport(fake_api))


@pytest.fixture
def mock_user_repo():
    """Mock UserRepository with async methods."""
    return AsyncMock()
