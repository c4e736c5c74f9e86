"""
Session Middleware

Binds one SessionEngine to each request and carries its id in a signed
cookie. Handlers reach the engine through request.state.session_store and
normally wrap it in a LazySession via src.api.deps.get_session.

Request flow:
1. Read the session cookie and verify its signature (tampered -> no id).
2. Build a SessionEngine over the app-wide SaveHandler.
3. Run the handler; the engine starts only if the handler touches the session.
4. shutdown() commits whatever is still active.
5. Set the cookie when the id is new, drop it after destroy().
"""

import logging
from typing import Callable, Optional

from itsdangerous import BadSignature, URLSafeSerializer
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.core.config import Settings, get_settings
from src.sessions.engine import SessionEngine
from src.sessions.store import MemorySaveHandler, SaveHandler


logger = logging.getLogger(__name__)

COOKIE_SALT = "lazy-session"


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Per-request session engine with signed cookie transport.

    Args:
        app: The wrapped ASGI application.
        settings: Settings to use (default: get_settings()).
        save_handler: Shared persistence backend (default: MemorySaveHandler).
    """

    def __init__(
        self,
        app: ASGIApp,
        settings: Optional[Settings] = None,
        save_handler: Optional[SaveHandler] = None,
    ) -> None:
        super().__init__(app)
        self._settings = settings or get_settings()
        self.save_handler = save_handler if save_handler is not None else MemorySaveHandler()
        self._serializer = URLSafeSerializer(
            self._settings.session_secret_key.get_secret_value(),
            salt=COOKIE_SALT,
        )

    def sign_session_id(self, session_id: str) -> str:
        return self._serializer.dumps(session_id)

    def read_session_id(self, request: Request) -> Optional[str]:
        """Return the verified session id from the request cookie, if any."""
        raw = request.cookies.get(self._settings.session_name)
        if not raw:
            return None
        try:
            value = self._serializer.loads(raw)
        except BadSignature:
            logger.warning("Ignoring session cookie with invalid signature")
            return None
        return value if isinstance(value, str) else None

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        engine = SessionEngine(
            self.save_handler,
            name=self._settings.session_name,
            session_id=self.read_session_id(request),
            save_path=self._settings.session_save_path,
            enabled=self._settings.sessions_enabled,
        )
        request.state.session_store = engine

        try:
            response = await call_next(request)
        except Exception as e:
            # Pending writes of a failed request are not persisted
            logger.error(f"Session aborted after handler error: {type(e).__name__}")
            engine.abort()
            raise

        engine.shutdown()
        self._write_cookie(request, response, engine)
        return response

    def _write_cookie(
        self, request: Request, response: Response, engine: SessionEngine
    ) -> None:
        cookie_name = engine.name()

        if engine.is_destroyed:
            if cookie_name in request.cookies:
                response.delete_cookie(key=cookie_name, path="/")
            return

        if not engine.was_started:
            return
        if not engine.id_changed and self._settings.session_cookie_max_age is None:
            return

        response.set_cookie(
            key=cookie_name,
            value=self.sign_session_id(engine.session_id()),
            max_age=self._settings.session_cookie_max_age,
            path="/",
            httponly=True,
            secure=self._settings.session_cookie_secure,
            samesite=self._settings.session_cookie_samesite,
        )
