"""
Unit tests for error normalization (describe_error / classify_message).
"""
from types import SimpleNamespace

import pytest

from user_management.core.exceptions import (
    GENERIC_ERROR_MESSAGE,
    ConfigurationError,
    HttpError,
    InvalidResponseFormat,
    NetworkError,
    Notice,
    Severity,
    UserServiceError,
    ValidationError,
    classify_message,
    describe_error,
)


class TestClassifyMessage:
    """Tests for classify_message"""

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("Network error: could not connect to the user API", Severity.WARNING),
            ("Failed to fetch", Severity.WARNING),
            ("Network error: request to the user API timed out", Severity.WARNING),
            ("User not found", Severity.INFO),
            ("Failed to load user (HTTP 404 Not Found)", Severity.INFO),
            ("First name cannot be empty", Severity.WARNING),
            ("Age must be greater than 0", Severity.WARNING),
            ("Email is not valid", Severity.WARNING),
            ("Internal server error", Severity.ERROR),
            ("Unexpected response format from user API: expected a list of users", Severity.ERROR),
        ],
    )
    def test_keywords(self, message, expected):
        assert classify_message(message) == expected

    def test_case_insensitive(self):
        assert classify_message("NETWORK DOWN") == Severity.WARNING


class TestDescribeError:
    """Tests for describe_error"""

    def test_service_error(self):
        assert describe_error(HttpError("User not found", 404)) == Notice(
            "User not found", Severity.INFO
        )

    def test_plain_exception(self):
        assert describe_error(RuntimeError("Something broke")) == Notice(
            "Something broke", Severity.ERROR
        )

    def test_exception_without_message(self):
        assert describe_error(RuntimeError()) == Notice(GENERIC_ERROR_MESSAGE, Severity.ERROR)

    def test_string_is_not_classified(self):
        assert describe_error("network hiccup") == Notice("network hiccup", Severity.ERROR)

    def test_object_with_message(self):
        assert describe_error(SimpleNamespace(message="from object")) == Notice(
            "from object", Severity.ERROR
        )

    @pytest.mark.parametrize("value", [None, 42, {"message": 3}, SimpleNamespace(message=None)])
    def test_unknown_falls_back(self, value):
        assert describe_error(value) == Notice(GENERIC_ERROR_MESSAGE, Severity.ERROR)


class TestHierarchy:
    """All client errors share one base"""

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("bad", field="age"),
            HttpError("bad", 500),
            InvalidResponseFormat("bad"),
            NetworkError("bad"),
            ConfigurationError("bad"),
        ],
    )
    def test_subclasses(self, error):
        assert isinstance(error, UserServiceError)
        assert error.message == "bad"
        assert str(error) == "bad"

    def test_http_error_details(self):
        error = HttpError("Server down", 503)
        assert error.status_code == 503
        assert error.details == {"status_code": 503}

    def test_validation_error_field(self):
        assert ValidationError("bad", field="age").details == {"field": "age"}
        assert ValidationError("bad").details == {}
