"""Application configuration settings."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_default_database_url() -> str:
    """Get the default database URL, using Fly Volume path if available."""
    if os.path.isdir("/data"):
        return "sqlite:////data/rentals.db"
    return "sqlite:///./rentals.db"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Rentals"
    VERSION: str = "0.1.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    # Database - PostGIS in production, SQLite file locally
    DATABASE_URL: str = _get_default_database_url()

    # Shared-secret tokens, used when no Cognito user pool is configured
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"

    # Cognito
    COGNITO_REGION: str | None = None
    COGNITO_USER_POOL_ID: str | None = None
    COGNITO_APP_CLIENT_ID: str | None = None
    ROLE_CLAIM: str = "custom:role"

    # Property search
    SEARCH_RADIUS_KM: float = 1000.0
    KM_PER_DEGREE: float = 111.0

    @property
    def cognito_issuer(self) -> str | None:
        """Issuer URL of the configured user pool, if any."""
        if not (self.COGNITO_REGION and self.COGNITO_USER_POOL_ID):
            return None
        return f"https://cognito-idp.{self.COGNITO_REGION}.amazonaws.com/{self.COGNITO_USER_POOL_ID}"


settings = Settings()
