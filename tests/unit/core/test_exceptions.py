"""
Unit tests for src/core/exceptions.py - exception hierarchy and error codes.
"""

import pytest

from src.core.exceptions import (
    ErrorCode,
    LazySessionException,
    SessionError,
    SessionStoreError,
    SessionsUnavailable,
    SessionValidationError,
    StoreNotStarted,
)


class TestErrorCode:
    """Tests for the ErrorCode enum."""

    def test_codes_are_strings(self):
        for code in ErrorCode:
            assert isinstance(code, str)
            assert code.value == code.name


class TestExceptionHierarchy:
    """Every session exception derives from LazySessionException."""

    @pytest.mark.parametrize(
        "exc_class",
        [SessionError, SessionsUnavailable, StoreNotStarted, SessionStoreError, SessionValidationError],
    )
    def test_inherits_base(self, exc_class):
        assert issubclass(exc_class, LazySessionException)

    @pytest.mark.parametrize(
        "exc_class",
        [SessionsUnavailable, StoreNotStarted, SessionStoreError],
    )
    def test_session_errors(self, exc_class):
        assert issubclass(exc_class, SessionError)

    def test_base_kwargs_become_attributes(self):
        exc = LazySessionException("boom", detail="extra")

        assert exc.message == "boom"
        assert exc.error_code == ErrorCode.SESSION_ERROR
        assert exc.detail == "extra"
        assert str(exc) == "boom"


class TestSpecificExceptions:
    """Tests for per-exception attributes and defaults."""

    def test_sessions_unavailable_defaults(self):
        exc = SessionsUnavailable()

        assert exc.error_code == ErrorCode.SESSIONS_UNAVAILABLE
        assert "disabled" in exc.message

    def test_store_not_started_operation(self):
        exc = StoreNotStarted("start first", operation="get")

        assert exc.operation == "get"
        assert exc.error_code == ErrorCode.STORE_NOT_STARTED

    def test_store_error_session_id(self):
        exc = SessionStoreError("write failed", session_id="abc")

        assert exc.session_id == "abc"
        assert exc.error_code == ErrorCode.STORE_ERROR

    def test_validation_error_field_and_value(self):
        exc = SessionValidationError("bad length", field="byte_length", value=0)

        assert exc.field == "byte_length"
        assert exc.value == 0
        assert exc.error_code == ErrorCode.VALIDATION_ERROR

    def test_can_be_caught_as_base(self):
        with pytest.raises(LazySessionException):
            raise StoreNotStarted("start first", operation="set")
