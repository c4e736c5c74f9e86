"""
Session Engine - in-process SessionStore implementation.

One SessionEngine serves one request. It is handed the session id read from
the client (usually a signed cookie), activates lazily on start(), loads the
bag from its SaveHandler and writes it back on commit() or shutdown().

The engine is the default collaborator for the web layer and the test double
used throughout the test suite. Production deployments plug a different
SaveHandler in; the engine itself stays the same.
"""

import re
import secrets
from typing import Any, Optional

from src.core.exceptions import SessionStoreError
from src.observability.logging import get_logger
from src.sessions.store import MemorySaveHandler, SaveHandler, SessionStore, StoreStatus

logger = get_logger(__name__)

# Ids are URL-safe base64 (secrets.token_urlsafe); anything else is replaced.
SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{22,128}$")
SESSION_ID_BYTES = 32


def generate_session_id() -> str:
    """Generate a new random session id."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)


def is_valid_session_id(value: Optional[str]) -> bool:
    """Check that a client-supplied id has the shape of a generated one."""
    return bool(value) and SESSION_ID_PATTERN.match(value) is not None


class SessionEngine(SessionStore):
    """
    Per-request session store backed by a SaveHandler.

    Attributes:
        was_started: True once start() succeeded during this request.
        is_destroyed: True after destroy(); the cookie layer drops the cookie.
        id_changed: True when the id differs from the one supplied by the client.

    Example:
        >>> handler = MemorySaveHandler()
        >>> engine = SessionEngine(handler, name="LAZYSESSID")
        >>> engine.start()
        True
        >>> engine.bag["user"] = "demo"
        >>> engine.commit()
        >>> SessionEngine(handler, name="LAZYSESSID", session_id=engine.session_id()).start()
        True
    """

    def __init__(
        self,
        handler: Optional[SaveHandler] = None,
        *,
        name: str = "LAZYSESSID",
        session_id: Optional[str] = None,
        save_path: str = "",
        enabled: bool = True,
    ) -> None:
        self._handler: SaveHandler = handler if handler is not None else MemorySaveHandler()
        self._name = name
        self._incoming_id = session_id or ""
        self._id = session_id or ""
        self._save_path = save_path
        self._enabled = enabled
        self._active = False
        self._commit_on_shutdown = True
        self._bag: dict[str, Any] = {}

        self.was_started = False
        self.is_destroyed = False

    @property
    def id_changed(self) -> bool:
        return self._id != self._incoming_id

    # =========================================================================
    # Status and lifecycle
    # =========================================================================

    def status(self) -> StoreStatus:
        if not self._enabled:
            return StoreStatus.DISABLED
        if self._active:
            return StoreStatus.ACTIVE
        return StoreStatus.INACTIVE

    def start(self) -> bool:
        """
        Activate the store for this request.

        Returns:
            True if the store is active, False if sessions are disabled or
            the save handler failed.
        """
        if not self._enabled:
            logger.warning("session start refused, sessions disabled", name=self._name)
            return False
        if self._active:
            return True
        if self.is_destroyed:
            logger.warning("session start refused, destroyed in this request", name=self._name)
            return False

        if not is_valid_session_id(self._id):
            if self._id:
                logger.warning("discarding malformed session id", name=self._name)
            self._id = generate_session_id()

        try:
            self._handler.open(self._save_path, self._name)
            self._bag = self._handler.read(self._id, self._save_path)
        except SessionStoreError as e:
            logger.error("session start failed", session_id=self._id, error=e.message)
            return False

        self._active = True
        self.was_started = True
        logger.debug("session started", session_id=self._id, keys=len(self._bag))
        return True

    def commit(self) -> None:
        """
        Write the bag and end the write phase.

        Later modifications stay visible in this request but are not
        persisted unless the store is started again.
        """
        if not self._active:
            return
        try:
            self._handler.write(self._id, self._bag, self._save_path)
            self._handler.close()
            logger.debug("session committed", session_id=self._id)
        except SessionStoreError as e:
            logger.error("session commit failed", session_id=self._id, error=e.message)
        finally:
            self._active = False

    def destroy(self) -> bool:
        """
        Delete the stored bag.

        The in-memory bag stays readable for the rest of the request.
        """
        if not self._active:
            logger.warning("session destroy refused, store inactive")
            return False
        try:
            self._handler.destroy(self._id, self._save_path)
            self._handler.close()
        except SessionStoreError as e:
            logger.error("session destroy failed", session_id=self._id, error=e.message)
            return False

        logger.info("session destroyed", session_id=self._id)
        self._active = False
        self.is_destroyed = True
        self._id = ""
        return True

    def abort(self) -> None:
        if not self._active:
            return
        self._handler.close()
        self._active = False
        logger.debug("session aborted", session_id=self._id)

    def regenerate_id(self, delete_old: bool = False) -> bool:
        if not self._active:
            logger.warning("session id regeneration refused, store inactive")
            return False

        old_id = self._id
        if delete_old:
            try:
                self._handler.destroy(old_id, self._save_path)
            except SessionStoreError as e:
                logger.error("old session slot not deleted", session_id=old_id, error=e.message)
                return False

        self._id = generate_session_id()
        logger.info(
            "session id regenerated",
            session_id=old_id,
            new_session_id=self._id,
            deleted_old=delete_old,
        )
        return True

    def shutdown(self) -> None:
        """End-of-request hook: commit if still active and registered to."""
        if self._active and self._commit_on_shutdown:
            self.commit()

    # =========================================================================
    # Bag
    # =========================================================================

    @property
    def bag(self) -> dict[str, Any]:
        return self._bag

    @bag.setter
    def bag(self, value: dict[str, Any]) -> None:
        self._bag = value

    # =========================================================================
    # Configuration accessors
    # =========================================================================

    def name(self, new_name: Optional[str] = None) -> str:
        old = self._name
        if new_name:
            if self._active:
                logger.warning("session name change refused, store active", name=new_name)
            else:
                self._name = new_name
        return old

    def session_id(self, new_id: Optional[str] = None) -> str:
        old = self._id
        if new_id:
            if self._active:
                logger.warning("session id change refused, store active")
            else:
                self._id = new_id
        return old

    def save_path(self, new_path: Optional[str] = None) -> str:
        old = self._save_path
        if new_path:
            if self._active:
                logger.warning("save path change refused, store active", save_path=new_path)
            else:
                self._save_path = new_path
        return old

    def set_save_handler(
        self, handler: SaveHandler, register_shutdown: bool = True
    ) -> bool:
        if self._active:
            logger.warning("save handler change refused, store active")
            return False
        self._handler = handler
        self._commit_on_shutdown = register_shutdown
        return True
