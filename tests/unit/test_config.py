"""
Unit tests for settings and the DI container.
"""
import os
from unittest.mock import patch

import pytest

from user_management.application.services.user_page import UserPage
from user_management.core.config import Settings, get_settings
from user_management.core.exceptions import ConfigurationError
from user_management.di.base_container import BaseContainer
from user_management.di.container import DIContainer
from user_management.domain.repositories.user_repository import UserRepository
from user_management.infrastructure.external.user_api_client import UserApiClient


class TestSettings:
    """Tests for Settings"""

    def test_reads_environment(self, mock_env):
        settings = Settings()
        assert settings.user_api_base_url == mock_env["USER_API_BASE_URL"]
        assert settings.user_api_timeout is None
        assert settings.notice_auto_clear_seconds == 5.0

    def test_optional_values(self):
        env = {
            "USER_API_BASE_URL": " http://api.test/users ",
            "USER_API_TIMEOUT": "2.5",
            "USER_API_REQUIRE_BASE_URL": "true",
            "CORS_ALLOW_ORIGINS": "http://a.test, http://b.test,",
        }
        with patch.dict(os.environ, env, clear=False):
            settings = Settings()
        assert settings.user_api_base_url == "http://api.test/users"
        assert settings.user_api_timeout == 2.5
        assert settings.user_api_require_base_url is True
        assert settings.cors_allow_origins == ["http://a.test", "http://b.test"]

    def test_get_settings_is_singleton(self, mock_env):
        assert get_settings() is get_settings()

    def test_missing_base_url_is_logged(self, caplog):
        with patch.dict(os.environ, {"USER_API_BASE_URL": "", "USER_API_REQUIRE_BASE_URL": "false"}):
            settings = Settings()
        settings.check_user_api_base_url()
        assert "USER_API_BASE_URL" in caplog.text

    def test_missing_base_url_can_be_fatal(self):
        with patch.dict(os.environ, {"USER_API_BASE_URL": "", "USER_API_REQUIRE_BASE_URL": "1"}):
            settings = Settings()
        with pytest.raises(ConfigurationError):
            settings.check_user_api_base_url()


class TestContainer:
    """Tests for dependency registration"""

    def test_registers_client_and_page(self, mock_env):
        container = DIContainer()
        repository = container.get(UserRepository)
        page = container.get(UserPage)
        assert isinstance(repository, UserApiClient)
        assert repository.base_url == mock_env["USER_API_BASE_URL"]
        assert page.repository is repository
        assert container.get(UserPage) is page

    def test_unregistered_raises(self):
        with pytest.raises(ValueError):
            BaseContainer().get(UserPage)

    def test_factory_builds_each_time(self):
        container = BaseContainer()
        container.register_factory(list, lambda: [])
        assert container.get(list) is not container.get(list)
