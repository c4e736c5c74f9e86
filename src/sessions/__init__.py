"""
Sessions Package - lazy session accessor with flash data and CSRF tokens.

Components:
- store: SessionStore/SaveHandler ports, StoreStatus, MemorySaveHandler
- engine: SessionEngine, the in-process per-request store
- accessor: LazySession, the facade used by request handlers
- flash: FlashManager, two-generation flash data
- csrf: CsrfGuard, token issuance and constant-time validation
"""

from src.sessions.accessor import LazySession
from src.sessions.csrf import CSRF_TOKEN_KEY, CsrfGuard
from src.sessions.engine import SessionEngine, generate_session_id
from src.sessions.flash import FLASHED_NEXT_REQUEST, FLASHED_THIS_REQUEST, FlashManager
from src.sessions.store import MemorySaveHandler, SaveHandler, SessionStore, StoreStatus

__all__ = [
    "LazySession",
    "FlashManager",
    "CsrfGuard",
    "SessionStore",
    "SessionEngine",
    "SaveHandler",
    "MemorySaveHandler",
    "StoreStatus",
    "generate_session_id",
    "CSRF_TOKEN_KEY",
    "FLASHED_NEXT_REQUEST",
    "FLASHED_THIS_REQUEST",
]
