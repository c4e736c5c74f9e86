"""
API Dependencies

This module provides FastAPI dependency injection functions for the API layer.

All dependencies are plain functions that can be overridden in tests using
FastAPI's dependency_overrides mechanism.
"""

import logging

from fastapi import HTTPException, Request, status

from src.core.config import Settings, get_settings as _get_settings
from src.core.exceptions import SessionsUnavailable
from src.sessions.accessor import LazySession


logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """
    Get application settings.

    Prefers the settings the app was built with (app.state.settings) and
    falls back to the cached environment settings.
    """
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else _get_settings()


def get_session(request: Request) -> LazySession:
    """
    Get the request's LazySession, creating it on first use.

    One accessor is cached per request on request.state.session. With lazy
    auto-start disabled the store is started here, once per request.

    Raises:
        HTTPException: 503 if sessions are disabled or the store cannot start,
                       500 if SessionMiddleware is not installed.
    """
    cached = getattr(request.state, "session", None)
    if cached is not None:
        return cached

    store = getattr(request.state, "session_store", None)
    if store is None:
        logger.error("get_session used without SessionMiddleware")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Session middleware is not installed",
        )

    settings = get_settings(request)
    try:
        session = LazySession(
            store,
            auto_start=settings.session_auto_start,
            csrf_token_bytes=settings.csrf_token_bytes,
        )
    except SessionsUnavailable as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=e.message,
        ) from e

    if not settings.session_auto_start and not session.start():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Session store could not be started",
        )

    request.state.session = session
    return session


__all__ = [
    "get_settings",
    "get_session",
]
