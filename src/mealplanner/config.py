"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "postgresql+asyncpg://localhost/mealplanner"

    # Single-household installs use this id when the client does not send one
    default_household_id: str = "default-household"

    # AI ingredient aggregation (optional, empty url disables it)
    ai_aggregation_url: str = ""
    ai_aggregation_api_key: str = ""
    ai_aggregation_timeout: float = 15.0  # seconds for the whole call
    ai_aggregation_max_retries: int = 2

    # Serving stepper bounds
    min_servings: int = 1
    max_servings: int = 99

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"
    allowed_origins: str = "http://localhost:3000,http://localhost:8081"

    @property
    def ai_aggregation_enabled(self) -> bool:
        """Check if an AI aggregation endpoint is configured."""
        return bool(self.ai_aggregation_url)

    @property
    def json_logs(self) -> bool:
        return self.log_format.lower() == "json"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
