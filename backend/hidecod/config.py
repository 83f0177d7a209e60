"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - The Admin API token comes from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Shopify Admin API
    shopify_shop_domain: str = ""
    shopify_admin_access_token: str = ""
    shopify_api_version: str = "2025-07"
    shopify_max_retries: int = 3
    shopify_timeout_seconds: int = 30
    shopify_base_delay_ms: int = 1000
    shopify_max_delay_ms: int = 30_000

    @field_validator("shopify_shop_domain", mode="before")
    @classmethod
    def strip_scheme(cls, v: str) -> str:
        """Accept 'https://shop.myshopify.com/' as well as the bare domain."""
        if isinstance(v, str):
            v = v.strip().removeprefix("https://").removeprefix("http://")
            return v.rstrip("/")
        return v

    # Payment customization
    customization_title: str = "Hide COD by City"
    customizations_page_size: int = 10
    functions_page_size: int = 25

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def admin_api_configured(self) -> bool:
        return bool(self.shopify_shop_domain and self.shopify_admin_access_token)


@lru_cache
def get_settings() -> Settings:
    return Settings()
