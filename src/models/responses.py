"""
Response Models

This module contains Pydantic models for API response serialization.
"""

from typing import Optional
from pydantic import BaseModel, Field


class FlashMessage(BaseModel):
    """
    A one-time notice carried over from the previous request.

    Attributes:
        text: Message text
        color: Background color hint for the message banner
    """

    text: str = Field(..., description="Message text")
    color: Optional[str] = Field(default=None, description="Banner background color")


class HomeResponse(BaseModel):
    """
    Demo home page state.

    Attributes:
        logged_in: Whether the session holds a logged-in user
        username: Logged-in user's name
        user_level: 1 for normal users, 2 for administrators
        csrf_token: Token to submit with the login form (anonymous only)
        message: Flash message from the previous request, if any
    """

    logged_in: bool = Field(..., description="Whether a user is logged in")
    username: Optional[str] = Field(default=None, description="Logged-in user")
    user_level: Optional[int] = Field(default=None, description="Access level")
    csrf_token: Optional[str] = Field(default=None, description="Login form CSRF token")
    message: Optional[FlashMessage] = Field(default=None, description="Flash message")
