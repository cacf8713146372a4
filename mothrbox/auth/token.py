"""
JWT token creation and validation.

Access tokens are HS256-signed JWTs carrying the user id (`sub`), email,
issued-at and expiry. They are stateless: validity is decided entirely by the
signature and the expiry claim, so there is no revocation.

The signing secret is handed to TokenService when the app is built; nothing
here reads the environment.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

import jwt
from pydantic import ValidationError

from ..exceptions import ExpiredToken, InternalError, InvalidToken
from ..utils import isodatetime
from .schemas import TokenPayload

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY = timedelta(hours=24)
REQUIRED_CLAIMS = ["sub", "email", "iat", "exp"]


class TokenService:
    """Issues and validates signed, time-bounded access tokens."""

    def __init__(
        self,
        secret: str,
        *,
        expiry: timedelta = DEFAULT_EXPIRY,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = isodatetime.utcnow,
    ):
        if not secret:
            raise ValueError("TokenService requires a non-empty secret")
        self._secret = secret
        self.expiry = expiry
        self.algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: str, email: str) -> str:
        """
        Generate an access token for a user.

        Args:
            user_id: Store-assigned user id, becomes the `sub` claim
            email: User email

        Returns:
            Encoded JWT string

        Raises:
            InternalError: If the expiry cannot be computed or signing fails
        """
        issued_at = self._clock()
        try:
            expires_at = issued_at + self.expiry
            payload = TokenPayload(
                sub=user_id,
                email=email,
                iat=isodatetime.to_unix(issued_at),
                exp=isodatetime.to_unix(expires_at),
            )
        except (OverflowError, ValidationError) as e:
            logger.error(f"Failed to build token claims: {e}")
            raise InternalError({"operation": "issue_token"}) from e

        try:
            return jwt.encode(payload.model_dump(), self._secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError) as e:
            logger.error(f"Failed to generate token: {e}")
            raise InternalError({"operation": "issue_token"}) from e

    def validate(self, token: str) -> TokenPayload:
        """
        Validate a token and return its claims.

        Raises:
            ExpiredToken: If the token is past its expiry
            InvalidToken: For any other decode or signature failure
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Token validation failed: expired")
            raise ExpiredToken()
        except jwt.InvalidTokenError as e:
            logger.debug(f"Token validation failed: {e}")
            raise InvalidToken({"reason": str(e)})

        try:
            return TokenPayload.model_validate(claims)
        except ValidationError as e:
            logger.debug(f"Token claims rejected: {e}")
            raise InvalidToken({"reason": "malformed claims"})
