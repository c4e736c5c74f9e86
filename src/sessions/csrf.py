"""
CSRF token issuance and validation.

One token per session, stored under ``__csrf_token``. The token is created
lazily on first read, replaced by regenerate_token(), and compared in
constant time by validate_token().
"""

import hmac
import secrets
from typing import TYPE_CHECKING, Any, Optional

from src.core.config import get_settings
from src.core.exceptions import SessionValidationError
from src.observability.logging import get_logger

if TYPE_CHECKING:
    from src.sessions.accessor import LazySession

logger = get_logger(__name__)

CSRF_TOKEN_KEY = "__csrf_token"


class CsrfGuard:
    """
    Per-session CSRF token guard layered on a LazySession.

    Args:
        session: The accessor the token is stored through.
        token_bytes: Default random byte count for new tokens.
                     Defaults to settings.csrf_token_bytes.
    """

    def __init__(self, session: "LazySession", token_bytes: Optional[int] = None) -> None:
        self._session = session
        if token_bytes is None:
            token_bytes = get_settings().csrf_token_bytes
        self._token_bytes = token_bytes

    def get_token(self) -> str:
        """Return the session's token, issuing one first if none exists."""
        if not self.has_token():
            return self.regenerate_token()
        return self._session.get(CSRF_TOKEN_KEY)

    def has_token(self) -> bool:
        return self._session.has(CSRF_TOKEN_KEY)

    def regenerate_token(self, byte_length: Optional[int] = None) -> str:
        """
        Generate, store and return a new token, replacing any previous one.

        Args:
            byte_length: Number of random bytes; the hex token is twice as long.

        Returns:
            The new hex-encoded token.

        Raises:
            SessionValidationError: If byte_length is not a positive integer.
        """
        length = self._token_bytes if byte_length is None else byte_length
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise SessionValidationError(
                "CSRF token length must be a positive number of bytes",
                field="byte_length",
                value=length,
            )

        token = secrets.token_hex(length)
        self._session.set(CSRF_TOKEN_KEY, token)
        logger.debug("csrf token issued", bytes=length)
        return token

    def validate_token(self, candidate: Any) -> bool:
        """
        Compare candidate with the stored token in constant time.

        Never raises: a missing token, a missing candidate or a candidate
        of the wrong type all validate as False.
        """
        stored = self._session.get(CSRF_TOKEN_KEY)
        if not isinstance(stored, str) or not stored:
            logger.info("csrf validation failed", reason="no_token")
            return False
        if not isinstance(candidate, str) or not candidate:
            logger.info("csrf validation failed", reason="no_candidate")
            return False

        valid = hmac.compare_digest(stored.encode("utf-8"), candidate.encode("utf-8"))
        if not valid:
            logger.info("csrf validation failed", reason="mismatch")
        return valid
