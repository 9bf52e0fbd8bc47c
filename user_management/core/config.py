# Standard library imports
import logging
import os
from typing import Final, List, Optional

# Local application imports
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


class Settings:
    """
    Application settings loaded from environment variables.
    
    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """
    
    def __init__(self) -> None:
        # User API Configuration
        self.user_api_base_url: Final[str] = os.getenv("USER_API_BASE_URL", "").strip()
        self.user_api_timeout: Final[Optional[float]] = _parse_optional_float(
            os.getenv("USER_API_TIMEOUT")
        )
        self.user_api_require_base_url: Final[bool] = _parse_bool(
            os.getenv("USER_API_REQUIRE_BASE_URL", "false")
        )
        
        # Page Configuration
        self.notice_auto_clear_seconds: Final[float] = float(
            os.getenv("NOTICE_AUTO_CLEAR_SECONDS", "5")
        )
        
        # CORS Configuration
        self.cors_allow_origins: Final[List[str]] = [
            origin.strip()
            for origin in os.getenv(
                "CORS_ALLOW_ORIGINS",
                "http://localhost:5173,http://localhost:3000",
            ).split(",")
            if origin.strip()
        ]
    
    def check_user_api_base_url(self) -> None:
        """
        Startup check for the user API base URL.
        
        Raises:
            ConfigurationError: If the base URL is missing and
                USER_API_REQUIRE_BASE_URL is enabled. Otherwise the
                missing value is only logged.
        """
        if self.user_api_base_url:
            return
        message = "USER_API_BASE_URL environment variable is not set"
        if self.user_api_require_base_url:
            raise ConfigurationError(message)
        logger.error(message)


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)
    
    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
