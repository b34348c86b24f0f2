"""Pydantic schemas for store login."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials of a store user created at bootstrap."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, repr=False)


class LoginResponse(BaseModel):
    """Session key to send as `Authorization: Bearer <api_key>`."""
    api_key: str
