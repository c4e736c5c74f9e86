"""
Request Models

This module contains Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """
    Login form submitted by the demo home page.

    Attributes:
        csrf_token: Token issued by GET / for this session
        username: Account name
        password: Account password
    """

    csrf_token: str = Field(default="", description="CSRF token issued with the form")
    username: str = Field(..., min_length=1, max_length=64, description="Account name")
    password: str = Field(..., max_length=128, description="Account password")
