"""
Custom exceptions for Lazy Session.

This module provides a hierarchy of custom exceptions for the session layer.
All exceptions inherit from LazySessionException and include error codes for
consistent error handling and API responses.

Propagation policy:
- SessionsUnavailable is fatal and raised at accessor construction.
- StoreNotStarted is raised only when lazy auto-start is switched off.
- SessionStoreError is raised by save handlers; the engine turns it into
  boolean results so callers never see it from start()/commit().
"""

from enum import Enum
from typing import Any


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for Lazy Session exceptions.

    These codes provide a consistent way to identify error types
    across the API and in logging.
    """

    SESSION_ERROR = "SESSION_ERROR"
    SESSIONS_UNAVAILABLE = "SESSIONS_UNAVAILABLE"
    STORE_NOT_STARTED = "STORE_NOT_STARTED"
    STORE_ERROR = "STORE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class LazySessionException(Exception):
    """
    Base exception for all Lazy Session errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.SESSION_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# SessionError
# =============================================================================


class SessionError(LazySessionException):
    """
    Exception for session management issues.

    Attributes:
        session_id: ID of the affected session (if known).
    """

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        error_code: str = ErrorCode.SESSION_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the session error.

        Args:
            message: Human-readable error message.
            session_id: ID of the affected session (optional).
            error_code: Machine-readable error code.
            **kwargs: Additional attributes.
        """
        super().__init__(message, error_code, **kwargs)
        self.session_id = session_id


class SessionsUnavailable(SessionError):
    """
    Raised when the session store reports itself administratively disabled.

    Fatal to the accessor: construction fails and no instance exists.
    """

    def __init__(
        self,
        message: str = "Sessions are disabled for this application",
        error_code: str = ErrorCode.SESSIONS_UNAVAILABLE,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code=error_code, **kwargs)


class StoreNotStarted(SessionError):
    """
    Raised when a data operation runs before the store was started.

    Only used when lazy auto-start is disabled; callers are then expected
    to call start() once per request (typically from middleware).

    Attributes:
        operation: Name of the accessor operation that was attempted.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        error_code: str = ErrorCode.STORE_NOT_STARTED,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code=error_code, **kwargs)
        self.operation = operation


class SessionStoreError(SessionError):
    """
    Exception raised by save handlers when reading or writing fails.

    Attributes:
        session_id: ID of the session being read or written (if known).
    """

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        error_code: str = ErrorCode.STORE_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, session_id=session_id, error_code=error_code, **kwargs)


# =============================================================================
# SessionValidationError
# =============================================================================


class SessionValidationError(LazySessionException):
    """
    Exception for invalid arguments passed to the session layer.

    Attributes:
        field: Name of the argument that failed validation.
        value: The invalid value (if safe to include).
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        error_code: str = ErrorCode.VALIDATION_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the validation error.

        Args:
            message: Human-readable error message.
            field: Name of the invalid argument (optional).
            value: The invalid value (optional).
            error_code: Machine-readable error code.
            **kwargs: Additional attributes.
        """
        super().__init__(message, error_code, **kwargs)
        self.field = field
        self.value = value
