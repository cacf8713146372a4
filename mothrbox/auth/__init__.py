"""Authentication module for Mothrbox.

This module provides:
- Schema validation for auth operations
- JWT token generation and validation
- Password hashing and verification
- Bearer-token authentication for protected endpoints
- User registration and login

Auth endpoints:
- POST /auth/register - Create a user and return a token
- POST /auth/login - Authenticate and return a token
- GET /auth/profile - Get current user info
- GET /protected - Example protected endpoint
"""

from . import schemas, token

__all__ = ["schemas", "token"]
