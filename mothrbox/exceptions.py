"""Exception hierarchy for Mothrbox.

Every error raised while handling a request maps to exactly one class here.
The Flask error handlers in main.py turn them into `{"error": <message>}`
responses with the class's status code.
"""


class MothrboxError(Exception):
    """Base exception for all Mothrbox errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details: dict | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ConfigurationError(MothrboxError):
    """Startup configuration is missing or unusable."""


class ValidationError(MothrboxError):
    """Request body failed schema validation."""

    status_code = 400
    default_message = "Invalid request body"


# ============================================================================
# Authentication Errors
# ============================================================================


class AuthError(MothrboxError):
    """Base class for the authentication error taxonomy.

    The message is fixed per class so that responses never carry internal
    detail. Extra context goes in `details`, which is logged but not rendered.
    """

    def __init__(self, details: dict | None = None):
        super().__init__(self.default_message, details)


class MissingToken(AuthError):
    status_code = 401
    default_message = "Missing authentication token"


class InvalidToken(AuthError):
    status_code = 401
    default_message = "Invalid token"


class ExpiredToken(AuthError):
    status_code = 401
    default_message = "Token expired"


class InvalidCredentials(AuthError):
    status_code = 401
    default_message = "Invalid credentials"


class UserAlreadyExists(AuthError):
    status_code = 409
    default_message = "User already exists"


class DatabaseError(AuthError):
    status_code = 500
    default_message = "Database error"


class InternalError(AuthError):
    status_code = 500
    default_message = "Internal server error"
