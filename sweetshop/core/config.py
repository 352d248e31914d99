"""
Application configuration management using Pydantic Settings.
All settings can be overridden via environment variables.
"""

from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "Sweet Shop API"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"
    DEBUG: bool = False

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    PASSWORD_MIN_LENGTH: int = 6

    # Database
    DATABASE_URL: str | None = None  # e.g. sqlite:///./sweetshop.db
    POSTGRES_SERVER: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_DB: str | None = None

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Get database URI - supports both SQLite and PostgreSQL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if self.POSTGRES_SERVER and self.POSTGRES_USER and self.POSTGRES_PASSWORD and self.POSTGRES_DB:
            return (
                f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )

        # Default to SQLite for local dev if nothing is configured
        return "sqlite:///./sweetshop.db"

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.SQLALCHEMY_DATABASE_URI.startswith("sqlite")

    @field_validator("SECRET_KEY", mode="after")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Reject an empty signing secret."""
        if not v.strip():
            raise ValueError("SECRET_KEY must not be empty")
        return v

    # CORS (comma-separated list of allowed origins)
    CORS_ORIGIN: str = "http://localhost:5173"

    @property
    def cors_origins(self) -> List[str]:
        """Split CORS_ORIGIN into individual origins."""
        return [origin.strip() for origin in self.CORS_ORIGIN.split(",") if origin.strip()]

    # First admin (created on startup)
    DISABLE_BOOTSTRAP_USERS: bool = False
    FIRST_SUPERUSER_EMAIL: str = "admin@sweetshop.com"
    FIRST_SUPERUSER_PASSWORD: str = "changethis"


settings = Settings()  # type: ignore
