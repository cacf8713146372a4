"""Pydantic schemas for authentication requests, responses and tokens."""

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer, field_validator

from ...utils import isodatetime


# ============================================================================
# Request Schemas
# ============================================================================


class Credentials(BaseModel):
    """Email and plaintext password submitted by a client.

    The email is the natural key of a user, so it is normalized (stripped and
    lower-cased) before it reaches the store. The password is never persisted;
    any non-empty string is accepted.
    """

    email: str = Field(..., max_length=254, description="User email address")
    password: str = Field(..., min_length=1, description="Plaintext password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Email must be of the form local@domain")
        return v


class RegisterRequest(Credentials):
    """Body of POST /auth/register."""


class LoginRequest(Credentials):
    """Body of POST /auth/login."""


# ============================================================================
# Response Schemas
# ============================================================================


class UserResponse(BaseModel):
    """Public view of a user record (no password hash)."""

    id: str
    email: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return isodatetime.to_timestamp(value)


class AuthResponse(BaseModel):
    """Token plus the public view of the user it was issued for."""

    token: str
    user: UserResponse


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPayload(BaseModel):
    """Claims carried by an access token.

    Timestamps are integer UNIX seconds, as registered JWT claims require.
    """

    sub: str = Field(..., min_length=1, description="User id")
    email: str
    iat: int
    exp: int


class AuthenticatedUser(BaseModel):
    """Identity resolved from a validated token, scoped to one request."""

    id: str
    email: str

    @classmethod
    def from_claims(cls, claims: TokenPayload) -> "AuthenticatedUser":
        return cls(id=claims.sub, email=claims.email)
