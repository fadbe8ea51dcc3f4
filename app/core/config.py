# app/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string)
      - JWT_ACCESS_SECRET (signing secret for access tokens)
      - JWT_REFRESH_SECRET (signing secret for refresh tokens)

    Optional:
      - BREVO_API_KEY (transactional email; not needed in test mode)
      - TYPESENSE_* (search; disabled with TYPESENSE_ENABLED=false)
      - SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY (file uploads)

    The object is built once by `create_app` and stored on `app.state`.
    Components receive it explicitly instead of re-reading the environment.
    """

    PROJECT_NAME: str = "Finishd API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str
    # Create tables + seed roles on startup (local dev / tests only;
    # production schema is owned by alembic migrations).
    DB_AUTO_CREATE: bool = False

    # JWT
    JWT_ACCESS_SECRET: str
    JWT_REFRESH_SECRET: str
    JWT_ALG: str = "HS256"
    JWT_ACCESS_EXPIRE_MINUTES: int = 15
    JWT_REFRESH_EXPIRE_DAYS: int = 7

    VERIFICATION_CODE_EXPIRE_MINUTES: int = 60

    # Email (Brevo)
    BREVO_API_KEY: str | None = None
    BREVO_API_URL: str = "https://api.brevo.com/v3"
    BREVO_SENDER_EMAIL: str = "noreply@finishd.app"
    BREVO_SENDER_NAME: str = "Finishd"

    # Frontend base URL, used in email links
    APP_BASE_URL: str = "http://localhost:5173"

    # Comma separated list of allowed origins
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Search (Typesense)
    TYPESENSE_ENABLED: bool = True
    TYPESENSE_HOST: str = "localhost"
    TYPESENSE_PORT: int = 8108
    TYPESENSE_PROTOCOL: str = "http"
    TYPESENSE_API_KEY: str = "finishd-typesense-api-key"

    # Storage (Supabase)
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    STORAGE_BUCKET: str = "assets"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def is_test(self) -> bool:
        return self.ENVIRONMENT == "test"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader for entry points (uvicorn, alembic, scripts).

    Request handlers read the instance bound to the running app instead,
    see `app.core.deps.get_app_settings`.
    """
    return Settings()
