# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Supabase Postgres connection string)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - CART_STORAGE_DIR (where buyer carts are persisted, one file per cart)
      - EMAIL_API_KEY (transactional email API key; unset => notifications
        are only logged)
      - ORDER_NOTIFICATION_EMAIL (inbox that receives new-order alerts)
    """

    PROJECT_NAME: str = "StyleCo Storefront API"
    API_V1_STR: str = "/api/v1"

    # Supabase / DB config
    DATABASE_URL: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Cart persistence
    CART_STORAGE_DIR: str = ".cart_storage"
    CART_COOKIE_NAME: str = "cart_id"

    # Transactional email API (Resend-compatible)
    EMAIL_API_URL: str = "https://api.resend.com/emails"
    EMAIL_API_KEY: str | None = None
    EMAIL_FROM: str = "StyleCo <onboarding@resend.dev>"
    ORDER_NOTIFICATION_EMAIL: str | None = None
    EMAIL_TIMEOUT_SECONDS: float = 10.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
