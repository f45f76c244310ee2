"""Storefront client configuration"""

from typing import Optional
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront"
    debug: bool = False

    # REST API
    api_base_url: str = "http://localhost:5000/api"
    request_timeout: float = 10.0

    # Local snapshot (None keeps state in memory only)
    storage_path: Optional[str] = ".storefront/storage.json"

    # Checkout pricing rules
    free_shipping_threshold: float = 100.0
    flat_shipping_fee: float = 10.0
    tax_rate: float = 0.07
    currency_symbol: str = "₹"

    # Wishlist retry policy
    wishlist_max_retries: int = 3
    wishlist_retry_initial_delay: float = 1.0


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
