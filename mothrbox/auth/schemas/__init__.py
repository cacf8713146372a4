"""Authentication Pydantic schemas for API validation."""

from .auth import (
    Credentials,
    RegisterRequest,
    LoginRequest,
    UserResponse,
    TokenPayload,
    AuthenticatedUser,
    AuthResponse,
)

__all__ = [
    "Credentials",
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "TokenPayload",
    "AuthenticatedUser",
    "AuthResponse",
]
