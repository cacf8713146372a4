"""Flask application entry point."""

import logging
import sys
from datetime import timedelta

from flask import Flask, jsonify
from flask_cors import CORS

from .api import auth_bp
from .auth.password import PasswordHasher
from .auth.service import AuthService
from .auth.token import TokenService
from .config import Settings, settings as default_settings
from .db import UserDirectory, create_client, init_db
from .exceptions import AuthError, MothrboxError, ValidationError

# Configure logging
logging.basicConfig(
    level=default_settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Error handlers
def handle_auth_error(error: AuthError):
    """Render an auth taxonomy error with its fixed message and status."""
    if error.status_code >= 500:
        logger.error(f"{error.__class__.__name__}: {error.details}")
    return jsonify({"error": error.message}), error.status_code


def handle_validation_error(error: ValidationError):
    """Handle request body validation failures."""
    response = {"error": error.message}
    if error.details:
        response["details"] = error.details
    return jsonify(response), 400


def handle_mothrbox_error(error: MothrboxError):
    """Handle any other MothrboxError without leaking its message."""
    logger.error(f"{error.__class__.__name__}: {error.message}")
    return jsonify({"error": "Internal server error"}), 500


def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error}")
    return jsonify({"error": "Internal server error"}), 500


# Health check endpoint
def health():
    """Health check endpoint."""
    return "OK", 200, {"Content-Type": "text/plain"}


def build_auth_service(settings: Settings, directory: UserDirectory, secret: str) -> AuthService:
    """Wire the auth service from settings and a resolved signing secret."""
    tokens = TokenService(
        secret,
        expiry=timedelta(hours=settings.jwt_expiry_hours),
        algorithm=settings.jwt_algorithm,
    )
    hasher = PasswordHasher(work_factor=settings.bcrypt_work_factor)
    return AuthService(directory, hasher, tokens)


def create_app(settings: Settings | None = None, directory: UserDirectory | None = None) -> Flask:
    """
    Create the Flask application.

    Args:
        settings: Settings to use (defaults to the environment-loaded settings)
        directory: User directory to use; connects to MongoDB when omitted

    Raises:
        ConfigurationError: If no signing secret is configured
        DatabaseError: If MongoDB cannot be reached
    """
    settings = settings or default_settings

    # Checked before connecting so a missing secret is reported as such
    secret = settings.resolve_jwt_secret()

    if directory is None:
        directory = init_db(create_client(settings), settings)

    app = Flask(__name__)
    app.extensions["mothrbox.auth"] = build_auth_service(settings, directory, secret)

    # CORS configuration
    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    app.register_error_handler(AuthError, handle_auth_error)
    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(MothrboxError, handle_mothrbox_error)
    app.register_error_handler(500, handle_internal_error)

    app.add_url_rule("/health", view_func=health, methods=["GET"])
    app.register_blueprint(auth_bp)

    return app


def run():
    """Start the server. Missing secret or unreachable store exits with status 1."""
    settings = default_settings
    logger.info("Starting Mothrbox Backend...")
    logger.info(f"Database: {settings.database_name}")
    logger.info(f"JWT secret: {'set' if settings.jwt_secret else 'NOT SET'}")

    try:
        app = create_app(settings)
    except MothrboxError as e:
        logger.error(f"Startup failed: {e.message} {e.details or ''}")
        sys.exit(1)

    logger.info(f"Starting server on {settings.host}:{settings.port}")
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
