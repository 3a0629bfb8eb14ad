from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Paylink API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Redemption links point at the payment page served from this origin
    base_url: str = "https://yourdomain.com"

    # Storage: "json" keeps the whole mapping in one file, "sqlite" uses an embedded DB
    storage_backend: Literal["json", "sqlite"] = "json"
    storage_path: str = "data/payment_links.json"
    database_url: str = "sqlite:///data/payment_links.db"

    # Link issuing policy
    default_expiry_minutes: float = 30
    max_id_attempts: int = 10
    id_bytes: int = 6

    # The full dump has no access control of its own; only enable behind a trusted proxy
    admin_list_enabled: bool = False

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_store: str = "INFO"            # payment link stores

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
