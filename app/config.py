"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="Potluck", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://potluck@localhost:5432/potluck",
        description="SQLAlchemy database URL (PostgreSQL or SQLite)",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="/api/v1", description="API route prefix")
    api_title: str = Field(default="Potluck API", description="API documentation title")
    api_description: str = Field(
        default="Potluck coordination: dish submissions, grocery aggregation and kitchen planning",
        description="API documentation description",
    )

    # Ingredient search
    search_lookup_limit: int = Field(
        default=20, ge=1, description="Result cap for the minimal lookup search mode"
    )
    search_browse_limit: int = Field(
        default=500, ge=1, description="Result cap for the broad browse search mode"
    )
    search_mode: Literal["lookup", "browse"] = Field(
        default="browse", description="Default search mode for /ingredients?q="
    )
    search_min_query_length: int = Field(
        default=2, ge=1, description="Minimum trimmed query length for search"
    )
    catalog_cache_max_age: int = Field(
        default=3600, ge=0, description="Cache-Control max-age for the full catalog dump"
    )

    # Phone identity
    phone_tail_length: int = Field(
        default=10, ge=1, description="Number of trailing digits compared on lookup"
    )
    phone_min_digits: int = Field(
        default=7, ge=1, description="Minimum normalized digits eligible for matching"
    )
    enforce_unique_phone: bool = Field(
        default=False, description="Reject submissions whose phone tail is already used"
    )

    # Reserved organizer submission bucket
    organizer_submission_id: int = Field(
        default=0, description="Reserved submission id for organizer ad-hoc items"
    )
    organizer_team_name: str = Field(default="Organizer")
    organizer_dish_name: str = Field(default="Organizer additions")

    # Notifications
    notification_feed_limit: int = Field(
        default=50, ge=1, description="Number of notifications returned by the feed"
    )

    # Bootstrap organizer account (scripts/init_db.py)
    default_organizer_username: str = Field(default="organizer")
    default_organizer_password: str = Field(default="changeme123")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    def search_limit_for(self, mode: str | None = None) -> int:
        """Result cap for a search mode, falling back to the configured default."""
        resolved = mode or self.search_mode
        if resolved == "lookup":
            return self.search_lookup_limit
        return self.search_browse_limit


# Global settings instance
settings = Settings()
