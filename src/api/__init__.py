"""API Package - FastAPI routes, middleware, and dependencies.

Components:
- routes: API endpoint routers (demo login flow)
- middleware: Request/response middleware (logging, sessions)
- deps: FastAPI dependency injection functions

Note: Import routers directly from src.api.routes to avoid circular imports.
"""

__all__ = ["routes", "middleware", "deps"]
