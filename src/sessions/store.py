"""
Session Store - collaborator interface for the session accessor.

This module defines the contract the accessor relies on. The store owns
cookie transport, session-id generation and persistence; the accessor only
sees a status, a start/commit/destroy lifecycle and a mutable bag.

Design Pattern:
- Ports and Adapters: SessionStore and SaveHandler are the ports.
- SessionEngine (src/sessions/engine.py) is the in-process adapter for
  SessionStore; MemorySaveHandler is the in-process adapter for SaveHandler
  and the FakeRepository used in tests.
"""

import copy
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from src.core.exceptions import SessionStoreError


class StoreStatus(str, Enum):
    """Lifecycle status reported by a session store."""

    DISABLED = "disabled"
    INACTIVE = "inactive"
    ACTIVE = "active"


# =============================================================================
# SaveHandler - persistence port
# =============================================================================


class SaveHandler(ABC):
    """
    Abstract persistence backend for session bags.

    A handler is shared by every request, so it keeps no per-request state:
    the save path is passed with every read/write/destroy call. The store
    calls open() before reading and close() after writing. Implementations
    raise SessionStoreError on backend failures.
    """

    @abstractmethod
    def open(self, save_path: str, name: str) -> bool:
        """Prepare the backend for the given save path and session name."""

    @abstractmethod
    def close(self) -> bool:
        """Release anything acquired in open()."""

    @abstractmethod
    def read(self, session_id: str, save_path: str = "") -> dict[str, Any]:
        """
        Return the stored bag for session_id under save_path.

        Unknown ids yield an empty dict, never an error.
        """

    @abstractmethod
    def write(self, session_id: str, data: dict[str, Any], save_path: str = "") -> bool:
        """Persist data as the bag of session_id under save_path."""

    @abstractmethod
    def destroy(self, session_id: str, save_path: str = "") -> bool:
        """Delete the stored bag of session_id. Missing ids are not an error."""


class MemorySaveHandler(SaveHandler):
    """
    Thread-safe in-memory save handler.

    Bags are keyed by (save_path, session_id) so separate save paths act as
    separate namespaces. Reads and writes deep-copy the bag; a request never
    shares mutable state with the stored copy or with another request.

    Example:
        >>> handler = MemorySaveHandler()
        >>> handler.write("abc", {"user": "demo"}, save_path="/app")
        True
        >>> handler.read("abc", save_path="/app")
        {'user': 'demo'}
        >>> handler.read("abc")
        {}
    """

    def __init__(self) -> None:
        self._bags: dict[tuple[str, str], dict[str, Any]] = {}
        self._lock = threading.Lock()

    def open(self, save_path: str, name: str) -> bool:
        return True

    def close(self) -> bool:
        return True

    def read(self, session_id: str, save_path: str = "") -> dict[str, Any]:
        with self._lock:
            bag = self._bags.get((save_path, session_id))
            return copy.deepcopy(bag) if bag is not None else {}

    def write(self, session_id: str, data: dict[str, Any], save_path: str = "") -> bool:
        try:
            snapshot = copy.deepcopy(data)
        except Exception as e:
            raise SessionStoreError(
                f"Session data is not copyable: {e}", session_id=session_id
            ) from e

        with self._lock:
            self._bags[(save_path, session_id)] = snapshot
        return True

    def destroy(self, session_id: str, save_path: str = "") -> bool:
        with self._lock:
            self._bags.pop((save_path, session_id), None)
        return True

    def exists(self, session_id: str, save_path: str = "") -> bool:
        """Check whether a bag is stored for session_id under save_path."""
        with self._lock:
            return (save_path, session_id) in self._bags

    def count(self) -> int:
        """Number of stored bags across all save paths."""
        with self._lock:
            return len(self._bags)


# =============================================================================
# SessionStore - the accessor's collaborator
# =============================================================================


class SessionStore(ABC):
    """
    Abstract per-request session store.

    One instance serves one request. The accessor reads status(), calls
    start() lazily and then manipulates ``bag`` directly.

    Methods:
        status: DISABLED, INACTIVE or ACTIVE
        start: activate the store for this request
        bag: the active session's key/value mapping (read/write)
        commit: flush the bag and end the write phase
        destroy: delete the stored session (bag stays readable)
        abort: discard pending writes
        regenerate_id: rotate the session identifier
        name / session_id / save_path: get, or set before start
        set_save_handler: swap the persistence backend before start
    """

    @abstractmethod
    def status(self) -> StoreStatus:
        """Report the current lifecycle status."""

    @abstractmethod
    def start(self) -> bool:
        """Activate the store. Returns False if activation is impossible."""

    @property
    @abstractmethod
    def bag(self) -> dict[str, Any]:
        """The active session's key/value mapping."""

    @bag.setter
    @abstractmethod
    def bag(self, value: dict[str, Any]) -> None:
        """Replace the active session's key/value mapping."""

    @abstractmethod
    def commit(self) -> None:
        """Write the bag and end the write phase."""

    @abstractmethod
    def destroy(self) -> bool:
        """Delete stored session data. Takes effect from the next request."""

    @abstractmethod
    def abort(self) -> None:
        """End the write phase without writing."""

    @abstractmethod
    def regenerate_id(self, delete_old: bool = False) -> bool:
        """Replace the session id, optionally deleting the old storage slot."""

    @abstractmethod
    def name(self, new_name: Optional[str] = None) -> str:
        """Return the session name, or set it and return the old one."""

    @abstractmethod
    def session_id(self, new_id: Optional[str] = None) -> str:
        """Return the session id, or set it and return the old one."""

    @abstractmethod
    def save_path(self, new_path: Optional[str] = None) -> str:
        """Return the save path, or set it and return the old one."""

    @abstractmethod
    def set_save_handler(
        self, handler: SaveHandler, register_shutdown: bool = True
    ) -> bool:
        """Install a persistence backend. Returns False if refused."""
