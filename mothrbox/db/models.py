"""User record as stored in the users collection."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..auth.schemas import UserResponse
from ..utils import isodatetime, uid


class User(BaseModel):
    """
    A user document.

    `id` is None until the record is inserted; the store assigns it and it
    never changes afterwards. The password hash never leaves this model except
    through the directory.
    """

    id: str | None = None
    email: str
    password_hash: str
    created_at: datetime = Field(default_factory=isodatetime.utcnow)
    updated_at: datetime = Field(default_factory=isodatetime.utcnow)

    @classmethod
    def new(cls, email: str, password_hash: str) -> "User":
        now = isodatetime.utcnow()
        return cls(email=email, password_hash=password_hash, created_at=now, updated_at=now)

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        """Build a User from a MongoDB document."""
        return cls(
            id=uid.to_string(doc["_id"]),
            email=doc["email"],
            password_hash=doc["password_hash"],
            created_at=isodatetime.ensure_utc(doc["created_at"]),
            updated_at=isodatetime.ensure_utc(doc["updated_at"]),
        )

    def to_document(self) -> dict:
        """Document for insertion; `_id` is left to the store."""
        return {
            "email": self.email,
            "password_hash": self.password_hash,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_public(self) -> UserResponse:
        return UserResponse(id=self.id or "", email=self.email, created_at=self.created_at)
