"""Data models for the admin auth API.

This module contains Pydantic models that define the structure of request and
response data for the admin login and logout endpoints.
"""

from typing_extensions import Annotated
from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    """Admin login request model.

    Attributes:
        password: The shared admin password
    """
    password: Annotated[str, Field(..., description="Shared admin password")]


class AuthResponse(BaseModel):
    """Response returned by the login and logout endpoints."""
    success: Annotated[bool, Field(True, description="Whether the call succeeded")]
