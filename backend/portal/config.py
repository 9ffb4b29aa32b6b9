"""Application configuration management."""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Maximo Version Portal"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: str = "*"

    # Local cache database
    database_url: str = "sqlite+aiosqlite:///./maximo_portal.db"

    # Hosted document store (optional, empty URL disables it)
    document_store_url: str = ""
    document_store_token: str = ""
    document_store_timeout: float = 10.0

    # Maximo REST API (optional)
    maximo_api_url: str = ""
    maximo_api_key: str = ""

    # Behaviour
    seed_mock_data: bool = True
    notifications_enabled: bool = True
    page_cache_enabled: bool = True
    page_cache_ttl_seconds: int = 300
    simulated_latency_ms: int = 0
    superuser_id: str = "superuser"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
