"""
API Middleware Package

Middleware Components:
- logging: Request/response logging with header redaction and request IDs
- session: Per-request session engine with signed cookie transport
"""

from src.api.middleware.logging import RequestLoggingMiddleware, redact_sensitive_headers
from src.api.middleware.session import SessionMiddleware

__all__ = [
    # Logging
    "RequestLoggingMiddleware",
    "redact_sensitive_headers",
    # Sessions
    "SessionMiddleware",
]
