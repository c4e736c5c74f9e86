"""Models Package - Pydantic models for the demo API."""

from src.models.requests import LoginRequest
from src.models.responses import FlashMessage, HomeResponse

__all__ = [
    # Requests
    "LoginRequest",
    # Responses
    "FlashMessage",
    "HomeResponse",
]
