"""
Configuration Management
Loads and validates environment variables
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )
    BASE_URL: str = "http://localhost:8000"

    # Redis (installed addon persistence)
    REDIS_URL: str = "redis://localhost:6379/0"
    ADDONS_STORAGE_KEY: str = "stremio_installed_addons"

    # Addon HTTP calls (seconds)
    HTTP_TIMEOUT: int = 15
    STREAM_FETCH_TIMEOUT: float = 10.0  # Per-addon bound, a timeout drops that addon's streams
    STREAM_FETCH_CONCURRENT: bool = True

    # Serialise first-run seeding of the default addon
    REGISTRY_SEED_GUARD: bool = True

    # Development
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
