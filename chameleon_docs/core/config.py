"""Application configuration with validation."""

from enum import Enum
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


INSECURE_DEFAULT_SECRET = "dev-insecure-session-secret"


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """Raised when application configuration is invalid for the environment."""
    pass


class Settings(BaseSettings):
    """
    Application settings with validation.

    Values come from environment variables (case-insensitive) or a local
    ``.env`` file.
    """

    # Environment
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production)"
    )

    # CORS Configuration
    cors_allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./chameleon.db",
        description="Database connection URL"
    )
    # Connection pool tuning (PostgreSQL only; ignored for SQLite).
    db_pool_size: int = Field(
        default=5,
        description="Number of persistent database connections"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Extra connections allowed during traffic bursts"
    )
    db_pool_timeout: int = Field(
        default=30,
        description="Seconds to wait for a connection from the pool before raising"
    )
    db_pool_recycle: int = Field(
        default=1800,
        description="Seconds before a connection is recycled"
    )

    # Sessions
    # JWT_SECRET_KEY signs session tokens. The default is insecure and blocks
    # production startup.
    jwt_secret_key: str = Field(
        default=INSECURE_DEFAULT_SECRET,
        description="Session token signing secret (override in production)"
    )
    jwt_algorithm: str = Field(default="HS256")
    session_cookie_name: str = Field(
        default="chameleon_session",
        description="Name of the HTTP-only cookie carrying the session token"
    )
    session_cookie_secure: bool = Field(
        default=False,
        description="Mark the session cookie Secure (HTTPS only)"
    )
    session_expires_hours: int = Field(
        default=720,
        description="Hours until a session token expires"
    )

    # Rate Limiting
    rate_limit_per_minute: int = Field(
        default=120,
        description="Maximum requests per client per minute (0 = unlimited)"
    )

    # Reimagine (AI rewrite)
    # LiteLLM model string, e.g. "gemini/gemini-2.5-flash", "openai/gpt-4o-mini".
    # Empty string = reimagine disabled (requests fail with a generic error).
    reimagine_model: str = Field(
        default="gemini/gemini-2.5-flash",
        description="LiteLLM model used for reimagine rewrites (empty = disabled)"
    )
    reimagine_api_key: str = Field(
        default="",
        description="API key for the reimagine model provider"
    )
    reimagine_api_base: str = Field(
        default="",
        description="Base URL for the reimagine provider (optional)"
    )
    reimagine_timeout: int = Field(
        default=60,
        description="Seconds before an upstream reimagine request times out"
    )
    reimagine_max_content_length: int = Field(
        default=50000,
        description="Maximum characters accepted by the reimagine endpoint"
    )

    # Analytics
    dedupe_page_views: bool = Field(
        default=False,
        description="Count at most one view per IP per page within 24 hours"
    )

    # Reader cache
    reader_cache_ttl_seconds: int = Field(
        default=300,
        description="Seconds a rendered reader payload stays cached"
    )
    reader_cache_max_entries: int = Field(default=512)

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    def get_cors_origins(self) -> List[str]:
        """
        Get CORS origins as a list.

        Parses comma-separated string and validates no wildcards.
        """
        origins = [origin.strip() for origin in self.cors_allowed_origins.split(',') if origin.strip()]

        if "*" in origins:
            raise ValueError(
                "Wildcard CORS (*) not allowed. "
                "Specify explicit origins in CORS_ALLOWED_ORIGINS"
            )

        return origins

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    def is_reimagine_configured(self) -> bool:
        return bool(self.reimagine_model)

    def validate_production_config(self) -> None:
        """Validate configuration for production environment.

        In production, fails startup if security-critical settings use insecure defaults.
        In development, returns silently and main.py logs warnings.

        Raises:
            ConfigurationError: If production config is insecure.
        """
        errors: list[str] = []

        if self.jwt_secret_key == INSECURE_DEFAULT_SECRET:
            errors.append(
                "JWT_SECRET_KEY is using the default insecure value. "
                "Generate a secure key: openssl rand -hex 32"
            )

        if not self.session_cookie_secure:
            errors.append(
                "SESSION_COOKIE_SECURE is false. "
                "Session cookies must be HTTPS-only in production."
            )

        origins = self.get_cors_origins()
        localhost_origins = [o for o in origins if "localhost" in o or "127.0.0.1" in o]
        if localhost_origins:
            errors.append(
                f"CORS allows localhost origins: {localhost_origins}. "
                "Remove localhost origins for production."
            )

        if errors and self.environment == Environment.PRODUCTION:
            raise ConfigurationError(
                "Production configuration is insecure:\n  - " + "\n  - ".join(errors)
            )

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
