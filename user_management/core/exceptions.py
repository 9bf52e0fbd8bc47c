"""
Error hierarchy for the user management application.

Every failure of the user API client is raised as a UserServiceError
subclass carrying a human readable message. The page turns any error into a
Notice (message + severity) with describe_error(); severity is derived from
keywords in the message and only drives presentation.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class UserServiceError(Exception):
    """Base exception for all user service errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or message
        self.details = details or {}


# -----------------------------------------------------------------------------
# Local (pre-request)
# -----------------------------------------------------------------------------


class ValidationError(UserServiceError):
    """Raised when user input fails constraints before any request is sent."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class ConfigurationError(UserServiceError):
    """Raised when the user API base URL is not configured."""
    pass


# -----------------------------------------------------------------------------
# Remote
# -----------------------------------------------------------------------------


class HttpError(UserServiceError):
    """Raised for a non-2xx response."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code


class InvalidResponseFormat(UserServiceError):
    """Raised when a 2xx response body does not have the expected shape."""
    pass


class NetworkError(UserServiceError):
    """Raised when the request could not complete."""
    pass


# -----------------------------------------------------------------------------
# Presentation
# -----------------------------------------------------------------------------


class Severity(str, Enum):
    """How a notice is presented on the page."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    """Message shown at the top of the user page."""
    message: str
    severity: Severity = Severity.ERROR


NETWORK_KEYWORDS = ("network", "connect", "fetch", "timed out")
NOT_FOUND_KEYWORDS = ("not found", "404")
VALIDATION_KEYWORDS = ("cannot be empty", "must be", "is not valid")


def classify_message(message: str) -> Severity:
    """Map an error message to a presentation severity by keyword matching."""
    text = message.lower()
    if any(keyword in text for keyword in NETWORK_KEYWORDS):
        return Severity.WARNING
    if any(keyword in text for keyword in NOT_FOUND_KEYWORDS):
        return Severity.INFO
    if any(keyword in text for keyword in VALIDATION_KEYWORDS):
        return Severity.WARNING
    return Severity.ERROR


def describe_error(error: Any) -> Notice:
    """
    Normalize anything raised by an operation into a Notice.

    Args:
        error: Exception, plain string, or object exposing a ``message`` string

    Returns:
        Notice with the extracted message. Only exceptions are classified;
        strings and message-carrying objects are shown as errors, and
        unrecognized values fall back to a generic error message.
    """
    if isinstance(error, UserServiceError):
        return Notice(message=error.message, severity=classify_message(error.message))
    if isinstance(error, Exception):
        message = str(error) or GENERIC_ERROR_MESSAGE
        return Notice(message=message, severity=classify_message(message))
    if isinstance(error, str) and error:
        return Notice(message=error)
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return Notice(message=message)
    return Notice(message=GENERIC_ERROR_MESSAGE)
