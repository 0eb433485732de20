"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "DevEvent API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Document store
    STORE_BACKEND: str = "memory"  # memory, mongo
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "devevent"
    MONGODB_TIMEOUT_MS: int = 5000

    # Events
    SIMILAR_EVENTS_LIMIT: int = 20

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
