"""Bearer-token authentication for protected endpoints.

This module provides:
- authenticate() - Resolve a request's headers to an AuthenticatedUser
- @auth_required - Route decorator that runs authenticate() and stores the
  identity on flask.g.user

Failure ordering is fixed: a missing Authorization header is reported before
a malformed one, and a malformed one before any token validation.
"""

import logging
from collections.abc import Mapping
from functools import wraps

from flask import current_app, g, request
from werkzeug.datastructures import Headers

from ..exceptions import InvalidToken, MissingToken
from .schemas import AuthenticatedUser
from .token import TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


# ============================================================================
# Shared Authentication Logic
# ============================================================================


def authenticate(headers: Mapping[str, str], tokens: TokenService) -> AuthenticatedUser:
    """
    Resolve request headers to an authenticated identity.

    Args:
        headers: Request headers (header names are matched case-insensitively)
        tokens: Token service holding the signing secret

    Returns:
        AuthenticatedUser built from the token claims

    Raises:
        MissingToken: If there is no Authorization header
        InvalidToken: If the header is not `Bearer <token>` or the token is invalid
        ExpiredToken: If the token has expired
    """
    if not isinstance(headers, Headers):
        headers = Headers(headers)

    auth_header = headers.get("Authorization")
    if auth_header is None:
        logger.warning("Unauthenticated request to protected endpoint")
        raise MissingToken()

    if not auth_header.startswith(BEARER_PREFIX):
        logger.warning("Authorization header without Bearer prefix")
        raise InvalidToken({"expected": "Authorization: Bearer <token>"})

    claims = tokens.validate(auth_header[len(BEARER_PREFIX):])
    return AuthenticatedUser.from_claims(claims)


def _authenticate_request() -> AuthenticatedUser:
    """Authenticate the current Flask request and store the identity in g.user."""
    auth_service = current_app.extensions["mothrbox.auth"]
    g.user = authenticate(request.headers, auth_service.tokens)
    logger.debug(f"Authentication successful for user {g.user.id}")
    return g.user


# ============================================================================
# Auth Required Decorator
# ============================================================================


def auth_required(f):
    """
    Decorator to require a valid bearer token for endpoint access.

    Example:
    ```python
    @auth_required
    def protected_endpoint():
        user = g.user  # AuthenticatedUser
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        _authenticate_request()
        return f(*args, **kwargs)

    return wrapper
