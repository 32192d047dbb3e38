"""
Configuration helpers for the shop services.

Settings are read once from environment variables so that routers,
services and the database layer do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    log_level: str
    product_service_name: str
    user_service_name: str
    product_service_url: str
    user_service_url: str
    gateway_timeout_seconds: float


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _float(value: str | None, default: float) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./shopapi.db"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        product_service_name=os.getenv("PRODUCT_SERVICE_NAME", "product-service"),
        user_service_name=os.getenv("USER_SERVICE_NAME", "user-service"),
        product_service_url=os.getenv("PRODUCT_SERVICE_URL", "http://localhost:8082").rstrip("/"),
        user_service_url=os.getenv("USER_SERVICE_URL", "http://localhost:8081").rstrip("/"),
        gateway_timeout_seconds=_float(os.getenv("GATEWAY_TIMEOUT_SECONDS"), 5.0),
    )
