"""Configuration management using pydantic-settings."""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Only ever used when development_mode is enabled
DEVELOPMENT_JWT_SECRET = "mothrbox-development-secret-do-not-deploy"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    database_name: str = "mothrbox"
    users_collection: str = "users"
    mongodb_timeout_ms: int = 5000

    # JWT Configuration
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Bcrypt work factor (higher = more secure but slower)
    # Tests use 4 for faster execution
    bcrypt_work_factor: int = 12

    # Allows the fixed development secret when JWT_SECRET is unset
    development_mode: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )

    def resolve_jwt_secret(self) -> str:
        """
        Return the token signing secret.

        Raises:
            ConfigurationError: If JWT_SECRET is unset outside development mode
        """
        if self.jwt_secret:
            return self.jwt_secret

        if not self.development_mode:
            raise ConfigurationError(
                "JWT_SECRET is not set",
                {"hint": "set JWT_SECRET, or DEVELOPMENT_MODE=true for local use"}
            )

        logger.warning("JWT_SECRET not set, using development secret (NOT SECURE FOR PRODUCTION)")
        return DEVELOPMENT_JWT_SECRET

    def redacted_mongodb_uri(self) -> str:
        """Connection URI with any credentials stripped, for logging."""
        scheme, sep, rest = self.mongodb_uri.partition("://")
        if not sep:
            return "hidden"
        return f"{scheme}://{rest.rsplit('@', 1)[-1]}"


settings = Settings()
