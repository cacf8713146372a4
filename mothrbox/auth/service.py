"""Authentication service: registration, login and profile lookup.

AuthService ties the User Directory to the password hasher and the token
service. It raises only members of the auth error taxonomy; the HTTP layer
turns those into responses.
"""

import logging

from ..db import UserDirectory
from ..db.models import User
from ..exceptions import InvalidCredentials, InvalidToken, UserAlreadyExists
from .password import PasswordHasher
from .schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from .token import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Orchestrates register/login over the user directory."""

    def __init__(self, directory: UserDirectory, hasher: PasswordHasher, tokens: TokenService):
        self.directory = directory
        self.hasher = hasher
        self.tokens = tokens

    def register(self, data: RegisterRequest) -> AuthResponse:
        """
        Create a user and issue a token for it.

        Raises:
            UserAlreadyExists: If the email is taken
            DatabaseError: On store failure
            InternalError: If hashing or signing fails
        """
        if self.directory.find_by_email(data.email) is not None:
            logger.warning("Registration attempted for existing email")
            raise UserAlreadyExists()

        password_hash = self.hasher.hash(data.password)
        user = self.directory.insert(User.new(data.email, password_hash))

        logger.info(f"Registered user {user.id}")
        return self._respond(user)

    def login(self, data: LoginRequest) -> AuthResponse:
        """
        Check credentials and issue a token.

        Unknown email and wrong password raise the same error after the same
        bcrypt work, so callers cannot tell which emails are registered.

        Raises:
            InvalidCredentials: If the email is unknown or the password is wrong
            DatabaseError: On store failure
            InternalError: If the stored hash is malformed or signing fails
        """
        user = self.directory.find_by_email(data.email)
        if user is None:
            # Same bcrypt cost as a real check
            self.hasher.verify(data.password, self.hasher.dummy_hash)
            logger.warning("Failed login attempt")
            raise InvalidCredentials()

        if not self.hasher.verify(data.password, user.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentials()

        logger.info(f"Successful login: {user.id}")
        return self._respond(user)

    def get_by_id(self, user_id: str) -> UserResponse:
        """
        Get the public view of a user by id.

        The id comes from a token subject, so a malformed one is an invalid
        token rather than a bad request.

        Raises:
            InvalidToken: If user_id is not a valid identifier
            InvalidCredentials: If the user no longer exists
            DatabaseError: On store failure
        """
        try:
            user = self.directory.find_by_id(user_id)
        except ValueError:
            raise InvalidToken({"reason": "malformed subject"})

        if user is None:
            logger.warning(f"Token subject {user_id} has no user record")
            raise InvalidCredentials()

        return user.to_public()

    def _respond(self, user: User) -> AuthResponse:
        token = self.tokens.issue(user.id, user.email)
        return AuthResponse(token=token, user=user.to_public())
