"""
Pytest configuration for the Lazy Session test suite.

This configuration sets up:
- Test discovery paths
- Test markers for categorization
- Shared fixtures following the FakeRepository pattern: MemorySaveHandler
  stands in for a persistence backend, SessionEngine for the host session
  engine, so tests can simulate several requests of one client.
"""

import sys
from pathlib import Path
from typing import Callable, Iterator, Optional

import pytest
from fastapi.testclient import TestClient

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# Test Markers
# =============================================================================


def pytest_configure(config):
    """
    Register custom markers for test categorization.

    - unit: Low gear tests for individual components
    - integration: High gear tests across the HTTP stack
    """
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for service interactions")


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def save_handler():
    """
    Provide an in-memory save handler shared by every simulated request.

    Returns:
        MemorySaveHandler: Empty handler
    """
    from src.sessions.store import MemorySaveHandler

    return MemorySaveHandler()


@pytest.fixture
def engine_factory(save_handler) -> Callable:
    """
    Provide a factory for per-request SessionEngine instances.

    Every engine built by the factory shares the save_handler fixture.
    """
    from src.sessions.engine import SessionEngine

    def _make(session_id: Optional[str] = None, **kwargs):
        kwargs.setdefault("name", "TESTSESSID")
        return SessionEngine(save_handler, session_id=session_id, **kwargs)

    return _make


@pytest.fixture
def engine(engine_factory):
    """Provide a fresh, not yet started SessionEngine."""
    return engine_factory()


@pytest.fixture
def session(engine):
    """Provide a LazySession over the engine fixture."""
    from src.sessions.accessor import LazySession

    return LazySession(engine, csrf_token_bytes=20)


@pytest.fixture
def next_request(engine_factory) -> Callable:
    """
    Simulate the end of one request and the start of the next.

    Calls shutdown() on the previous accessor's store (commit, as the web
    layer does) and returns a new LazySession bound to the same session id.

    Example:
        >>> second = next_request(first)
    """
    from src.sessions.accessor import LazySession

    def _next(previous, **kwargs):
        previous.store.shutdown()
        session_id = previous.store.session_id() or None
        kwargs.setdefault("csrf_token_bytes", 20)
        return LazySession(engine_factory(session_id=session_id), **kwargs)

    return _next


# =============================================================================
# Settings and HTTP Fixtures
# =============================================================================


@pytest.fixture
def test_settings():
    """
    Create test settings with safe defaults.

    Returns:
        Settings: Configured settings for testing
    """
    from src.core.config import Settings

    return Settings(
        service_name="lazy-session-test",
        environment="development",
        log_level="DEBUG",
        sessions_enabled=True,
        session_name="TESTSESSID",
        session_save_path="",
        session_auto_start=True,
        session_secret_key="test-secret-key",
        session_cookie_secure=False,
        session_cookie_samesite="lax",
        csrf_token_bytes=20,
    )


@pytest.fixture
def app(test_settings, save_handler):
    """Create the demo application wired to the shared save handler."""
    from src.main import create_app

    return create_app(settings=test_settings, save_handler=save_handler)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    """
    Create a test client for the demo application.

    The client keeps cookies between calls, so consecutive requests belong
    to the same session.
    """
    with TestClient(app) as test_client:
        yield test_client
