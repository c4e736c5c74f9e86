"""
Core module for Lazy Session.

This module contains configuration, exceptions, and shared utilities.
"""

from src.core.config import Settings, get_settings
from src.core.exceptions import (
    ErrorCode,
    LazySessionException,
    SessionError,
    SessionStoreError,
    SessionValidationError,
    SessionsUnavailable,
    StoreNotStarted,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "LazySessionException",
    "SessionError",
    "SessionsUnavailable",
    "StoreNotStarted",
    "SessionStoreError",
    "SessionValidationError",
]
