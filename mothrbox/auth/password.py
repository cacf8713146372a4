"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic salting and a configurable
work factor. bcrypt only reads the first 72 bytes of its input, so longer
passwords are truncated to that length on both hash and verify.
"""

import logging

import bcrypt

from ..exceptions import InternalError

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """bcrypt hash/verify with a fixed work factor."""

    def __init__(self, work_factor: int = 12):
        self.work_factor = work_factor
        # Verifying against this costs the same as verifying a real user's hash
        self.dummy_hash = self.hash("mothrbox-no-such-user")

    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh salt.

        Raises:
            InternalError: If bcrypt fails
        """
        try:
            salt = bcrypt.gensalt(rounds=self.work_factor)
            return bcrypt.hashpw(_encode(password), salt).decode("utf-8")
        except ValueError as e:
            logger.error(f"Failed to hash password: {e}")
            raise InternalError({"operation": "hash_password"}) from e

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a password against a stored bcrypt hash.

        Returns:
            True if the password matches, False otherwise

        Raises:
            InternalError: If the stored hash is malformed
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError as e:
            logger.error(f"Failed to verify password: {e}")
            raise InternalError({"operation": "verify_password"}) from e
