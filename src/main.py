"""
Lazy Session - Demo Application Entry Point

This module provides the FastAPI application that demonstrates the session
accessor: signed-cookie sessions, flash messages and CSRF-protected login.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from src.api.middleware.logging import RequestLoggingMiddleware
from src.api.middleware.session import SessionMiddleware
from src.api.routes.demo import router as demo_router
from src.core.config import Settings, get_settings
from src.observability.logging import configure_logging, get_logger
from src.sessions.store import SaveHandler

# Application metadata
APP_NAME = "Lazy Session"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Lazy server-side sessions with flash data and CSRF tokens"


def create_app(
    settings: Optional[Settings] = None,
    save_handler: Optional[SaveHandler] = None,
) -> FastAPI:
    """
    Build the demo application.

    Args:
        settings: Settings to use (default: get_settings()).
        save_handler: Session persistence backend shared by all requests
                      (default: a fresh MemorySaveHandler).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        configure_logging(level=settings.log_level)
        logger = get_logger(__name__)
        logger.info(
            "application starting",
            service=settings.service_name,
            version=APP_VERSION,
            environment=settings.environment,
            sessions_enabled=settings.sessions_enabled,
        )
        app.state.initialized = True

        yield

        logger.info("application shutting down", service=settings.service_name)
        app.state.initialized = False

    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Last added runs first: request logging wraps the session middleware
    app.add_middleware(SessionMiddleware, settings=settings, save_handler=save_handler)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(demo_router)

    return app


app = create_app()
