from .config import Settings, get_settings, reset_settings
from .exceptions import (
    UserServiceError,
    ValidationError,
    HttpError,
    InvalidResponseFormat,
    NetworkError,
    ConfigurationError,
    Severity,
    Notice,
    classify_message,
    describe_error,
)

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "UserServiceError",
    "ValidationError",
    "HttpError",
    "InvalidResponseFormat",
    "NetworkError",
    "ConfigurationError",
    "Severity",
    "Notice",
    "classify_message",
    "describe_error",
]
