"""Authentication endpoints for Mothrbox.

These endpoints handle user authentication:
- Registration and login (public)
- User profile retrieval (bearer token)
- An example protected route (bearer token)

All endpoints except /protected return JSON. Errors are raised as
exceptions from mothrbox.exceptions and rendered by the handlers in main.py.
"""

import logging

from flask import Blueprint, current_app, g, jsonify

from ..auth.decorators import auth_required
from ..auth.schemas import LoginRequest, RegisterRequest
from ..auth.service import AuthService
from .validation import validate_request

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)


def get_auth_service() -> AuthService:
    """AuthService attached to the current app by create_app()."""
    return current_app.extensions["mothrbox.auth"]


# ============================================================================
# Authentication Endpoints
# ============================================================================


@auth_bp.route("/auth/register", methods=["POST"])
@validate_request
def register(data: RegisterRequest):
    """
    Register a new user and return a token.

    Example request:
    ```json
    {
        "email": "user@example.com",
        "password": "securepassword123"
    }
    ```

    Example response (201):
    ```json
    {
        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
        "user": {
            "id": "665f1c2e9b1e8a3d4c2b1a00",
            "email": "user@example.com",
            "created_at": "2025-12-29T10:30:00Z"
        }
    }
    ```

    Error Responses:
        400: Invalid request body
        409: User already exists
        500: Database or internal error
    """
    response = get_auth_service().register(data)
    return jsonify(response.model_dump()), 201


@auth_bp.route("/auth/login", methods=["POST"])
@validate_request
def login(data: LoginRequest):
    """
    Authenticate user and return a token.

    Accepts both JSON and form data. The response has the same shape as
    /auth/register.

    Error Responses:
        400: Invalid request body
        401: Invalid credentials (unknown email or wrong password)
        500: Database or internal error
    """
    response = get_auth_service().login(data)
    return jsonify(response.model_dump()), 200


# ============================================================================
# Protected Endpoints
# ============================================================================


@auth_bp.route("/auth/profile", methods=["GET"])
@auth_required
def get_profile():
    """
    Get current user info.

    Requires `Authorization: Bearer <token>`.

    Error Responses:
        401: Missing, invalid or expired token, or the user no longer exists
    """
    user = get_auth_service().get_by_id(g.user.id)
    return jsonify(user.model_dump()), 200


@auth_bp.route("/protected", methods=["GET"])
@auth_required
def protected_example():
    """Example protected route returning a plain-text greeting."""
    return f"Hello, {g.user.email}! This is a protected route."
