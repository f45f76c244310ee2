"""Mock Backend Configuration"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseSettings):
    """Mock backend settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="MOCK_BACKEND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront Mock Backend"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 5000

    # Token issuing
    jwt_secret: str = "mock-backend-dev-secret"
    jwt_algorithm: str = "HS256"
    access_token_ttl_minutes: int = 15
    refresh_token_ttl_days: int = 7

    # Older deployments have no bulk `DELETE /cart`
    bulk_cart_clear_enabled: bool = True


@lru_cache()
def get_backend_settings() -> BackendSettings:
    """Get cached settings instance"""
    return BackendSettings()
