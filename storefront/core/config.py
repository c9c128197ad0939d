# storefront/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (HS256 signing secret shared with the auth service)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - DATABASE_SSL_REQUIRE (append sslmode=require to Postgres URLs)
      - CORS_ORIGINS (JSON list of allowed frontend origins)
    """

    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = "/api"

    # Database config
    DATABASE_URL: str = "sqlite:///./storefront.db"
    DATABASE_SSL_REQUIRE: bool = False
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 0
    DATABASE_ECHO: bool = False

    # JWT verification (tokens are issued elsewhere)
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"

    # Guest carts
    SESSION_HEADER: str = "x-session-id"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    # Catalog pagination
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
