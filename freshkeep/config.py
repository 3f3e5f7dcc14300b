"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./freshkeep.db")

    # Open Food Facts product lookup (barcode scans)
    product_lookup_base_url: str = Field(default="https://world.openfoodfacts.org")
    product_lookup_timeout: float = Field(default=15.0)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has a real database."""
        if self.environment == "production":
            if "localhost" in self.database_url or self.database_url.startswith("sqlite"):
                raise ValueError("DATABASE_URL should point at a real database in production")
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
