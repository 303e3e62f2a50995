"""
Configuration helpers for the Greetings API.

Exposes a Settings object that reads environment variables (storage paths,
database URL, logging, CORS) so that routers/services do not fetch os.environ
directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    data_file: str
    database_url: str
    log_level: str
    log_file: str
    cors_origins: tuple
    api_version: str

    @property
    def is_development(self) -> bool:
        return self.app_env in {"dev", "development", "local"}


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> tuple:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "production").lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        data_file=os.getenv("DATA_FILE") or os.path.join("data", "data.json"),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("LOG_FILE", ""),
        cors_origins=_csv(os.getenv("CORS_ORIGINS", "*")) or ("*",),
        api_version=os.getenv("API_VERSION", "1.0.0"),
    )
