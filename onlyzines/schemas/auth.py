"""Pydantic schemas for authentication workflows."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from onlyzines.schemas.base import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class SignupRequest(CamelModel):
    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=8)
    display_name: str | None = Field(default=None, min_length=1, max_length=100)


class LoginRequest(CamelModel):
    """Credentials payload submitted to the login endpoint."""

    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    password: str


class RefreshRequest(CamelModel):
    refresh_token: str


class TokenPair(CamelModel):
    """Access/refresh tokens handed to the client after authentication."""

    access_token: str
    refresh_token: str
    expires_in: int


class UserRead(CamelModel):
    id: int
    email: str
    display_name: str | None = None


class UserProfile(UserRead):
    avatar_url: str | None = None
    created_at: datetime


class AuthResponse(CamelModel):
    user: UserRead
    tokens: TokenPair


class RefreshResponse(CamelModel):
    tokens: TokenPair


class MeResponse(CamelModel):
    user: UserProfile


class SuccessResponse(CamelModel):
    success: bool = True
