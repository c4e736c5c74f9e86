"""
Session Accessor - lazy-starting facade over a SessionStore.

LazySession wraps the per-request store handed to it, starts it on first
access and rotates flash data exactly once per instance. One instance is
created per request; it is never shared across requests or threads.

Pattern: Dependency injection for the store (no ambient global session)
Pattern: Mapping-style sugar as thin aliases over get/set/has/delete
"""

from typing import Any, Iterator, Optional

from src.core.exceptions import SessionsUnavailable, StoreNotStarted
from src.observability.logging import get_logger
from src.sessions.csrf import CsrfGuard
from src.sessions.flash import FlashManager
from src.sessions.store import SaveHandler, SessionStore, StoreStatus

logger = get_logger(__name__)


class LazySession:
    """
    Lazily-started session accessor with flash data and CSRF helpers.

    Args:
        store: The per-request session store.
        auto_start: Start the store on first access. When False, data
            operations raise StoreNotStarted unless the store is active.
        csrf_token_bytes: Default CSRF token length in bytes.

    Raises:
        SessionsUnavailable: If the store reports itself disabled.

    Attributes:
        flash: FlashManager for one-request-lifetime values.
        csrf: CsrfGuard for token issuance and validation.

    Example:
        >>> session = LazySession(SessionEngine(handler))
        >>> session["user"] = "demo"
        >>> session.get("user")
        'demo'
        >>> session.flash.put("message", "Welcome back")
        >>> token = session.csrf.get_token()
    """

    def __init__(
        self,
        store: SessionStore,
        *,
        auto_start: bool = True,
        csrf_token_bytes: Optional[int] = None,
    ) -> None:
        if store.status() == StoreStatus.DISABLED:
            raise SessionsUnavailable()

        self._store = store
        self._auto_start = auto_start
        self.flash = FlashManager(self)
        self.csrf = CsrfGuard(self, token_bytes=csrf_token_bytes)

    @property
    def store(self) -> SessionStore:
        return self._store

    # =========================================================================
    # Start
    # =========================================================================

    def start(self) -> bool:
        """
        Make sure the store is active for this request.

        Idempotent. The first successful call rotates flash data.

        Returns:
            True if the store is active, False if it could not be started.
        """
        if self._store.status() == StoreStatus.ACTIVE or self._store.start():
            self.flash.rotate()
            return True
        return False

    def _ensure_started(self, operation: str) -> None:
        if not self._auto_start and self._store.status() != StoreStatus.ACTIVE:
            raise StoreNotStarted(
                f"Session store must be started before {operation}()",
                operation=operation,
            )
        self.start()

    # =========================================================================
    # Data operations
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        self._ensure_started("get")
        return self._store.bag.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._ensure_started("set")
        self._store.bag[key] = value

    def has(self, key: str) -> bool:
        self._ensure_started("has")
        return key in self._store.bag

    def delete(self, key: str) -> None:
        """Remove key if present."""
        self._ensure_started("delete")
        self._store.bag.pop(key, None)

    def clear(self) -> None:
        """
        Empty the session immediately.

        Unlike destroy(), values are gone for the rest of this request too.
        """
        self._ensure_started("clear")
        self._store.bag = {}

    def get_all(self) -> dict[str, Any]:
        """Snapshot of the whole bag, reserved flash/CSRF keys included."""
        self._ensure_started("get_all")
        return dict(self._store.bag)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.delete(key)

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[str]:
        """Iterate over a snapshot of the session keys."""
        return iter(self.get_all())

    # =========================================================================
    # Lifecycle passthroughs
    # =========================================================================

    def commit(self) -> None:
        """Write session data and release the store early."""
        self._store.commit()

    def destroy(self) -> bool:
        """
        Delete the stored session.

        Values stay readable in this request; use clear() to drop them now.
        """
        self.start()
        return self._store.destroy()

    def abort(self) -> None:
        """Discard changes made since the store was started."""
        self._store.abort()

    def regenerate_id(self, delete_old: bool = False) -> bool:
        """Give the session a new id, e.g. after login."""
        self.start()
        return self._store.regenerate_id(delete_old)

    def session_name(self, name: Optional[str] = None) -> str:
        """Get the session name, or set it (before start) and return the old one."""
        return self._store.name(name)

    def session_id(self, new_id: Optional[str] = None) -> str:
        """
        Get the session id, or set it (before start) and return the old one.

        Reading the id starts the store since an inactive store has no id yet.
        """
        if new_id:
            return self._store.session_id(new_id)
        self.start()
        return self._store.session_id()

    def save_path(self, path: Optional[str] = None) -> str:
        return self._store.save_path(path)

    def set_save_handler(
        self, handler: SaveHandler, register_shutdown: bool = True
    ) -> bool:
        return self._store.set_save_handler(handler, register_shutdown)
