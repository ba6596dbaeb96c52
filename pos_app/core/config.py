# pos_app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key, used for Auth passthrough)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)
      - SUPABASE_SERVICE_ROLE_KEY (data + storage access from the backend)
    """

    PROJECT_NAME: str = "POS Back Office"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    PRODUCT_IMAGE_BUCKET: str = "product-images"

    # "Today" on the dashboard is computed in this zone
    SHOP_TIMEZONE: str = "UTC"

    POS_PAGE_SIZE: int = 10
    DASHBOARD_PAGE_SIZE: int = 5
    REPORT_PAGE_SIZE: int = 10
    TOP_PRODUCTS_LIMIT: int = 3

    # Delete the transaction header when its line items fail to insert
    CHECKOUT_COMPENSATE_ORPHANS: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
