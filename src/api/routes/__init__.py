"""Routes Package - API endpoint definitions.

Note: Import routers directly from individual modules to avoid circular imports.
Example: from src.api.routes.demo import router as demo_router
"""

__all__ = ["demo"]
