"""
Flash data - values that live for exactly one subsequent request.

Two buckets are kept inside the session bag:

- ``__flashedNextRequest``: written by put() during this request.
- ``__flashedThisRequest``: filled once per request by rotate(), which moves
  the previous request's "next" bucket here and empties "next".

Reads (has/get/get_all) look at "this"; get_next/get_all_next peek at "next".
A bucket that is missing or is not a mapping is treated as empty.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from src.sessions.accessor import LazySession


FLASHED_NEXT_REQUEST = "__flashedNextRequest"
FLASHED_THIS_REQUEST = "__flashedThisRequest"


class FlashManager:
    """
    Two-generation flash message store layered on a LazySession.

    Attributes:
        rotated: True once this request's rotation has happened.

    Example:
        >>> session.flash.put("message", "Saved")      # request N
        >>> session.flash.get("message")               # request N + 1
        'Saved'
        >>> session.flash.get("message", "gone")       # consumed
        'gone'
    """

    def __init__(self, session: "LazySession") -> None:
        self._session = session
        self.rotated = False

    def rotate(self) -> bool:
        """
        Promote the "next" bucket to "this" bucket.

        Runs at most once per instance. The flag is set before touching the
        session because get()/set() call start(), which calls back here.

        Returns:
            True if the rotation happened on this call.
        """
        if self.rotated:
            return False
        self.rotated = True

        pending = self._session.get(FLASHED_NEXT_REQUEST)
        self._session.set(
            FLASHED_THIS_REQUEST, dict(pending) if isinstance(pending, Mapping) else {}
        )
        self._session.set(FLASHED_NEXT_REQUEST, {})
        return True

    def _bucket(self, key: str) -> dict[str, Any]:
        bucket = self._session.get(key)
        if not isinstance(bucket, dict):
            bucket = dict(bucket) if isinstance(bucket, Mapping) else {}
            self._session.set(key, bucket)
        return bucket

    # =========================================================================
    # Writing
    # =========================================================================

    def put(self, key: str, value: Any) -> None:
        """Flash a value; it becomes readable on the next request."""
        self._bucket(FLASHED_NEXT_REQUEST)[key] = value

    def preserve(self) -> None:
        """
        Carry every value still present in this request over to the next one.

        Values already consumed by get()/get_all() are not preserved.
        """
        for key, value in list(self._bucket(FLASHED_THIS_REQUEST).items()):
            self.put(key, value)

    def keep(self, *keys: str) -> None:
        """Carry only the named values over to the next request."""
        current = self._bucket(FLASHED_THIS_REQUEST)
        for key in keys:
            if key in current:
                self.put(key, current[key])

    # =========================================================================
    # Reading this request's values
    # =========================================================================

    def has(self, key: str) -> bool:
        return key in self._bucket(FLASHED_THIS_REQUEST)

    def get(self, key: str, default: Any = None, delete: bool = True) -> Any:
        """
        Read a value flashed by the previous request.

        Args:
            key: Flash key.
            default: Returned when the key is absent or already consumed.
            delete: Consume the value so later reads return default.

        Returns:
            The flashed value, or default.
        """
        bucket = self._bucket(FLASHED_THIS_REQUEST)
        if key not in bucket:
            return default
        if delete:
            return bucket.pop(key)
        return bucket[key]

    def get_all(self, delete: bool = True) -> dict[str, Any]:
        """Snapshot of every value flashed by the previous request."""
        snapshot = dict(self._bucket(FLASHED_THIS_REQUEST))
        if delete:
            self._session.set(FLASHED_THIS_REQUEST, {})
        return snapshot

    # =========================================================================
    # Peeking at the next request's values
    # =========================================================================

    def get_next(self, key: str, default: Any = None) -> Any:
        return self._bucket(FLASHED_NEXT_REQUEST).get(key, default)

    def get_all_next(self) -> dict[str, Any]:
        return dict(self._bucket(FLASHED_NEXT_REQUEST))
