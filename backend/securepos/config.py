"""
Application Configuration — Environment & Settings
Centralizes all config from .env with Pydantic Settings for validation.
"""
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve paths relative to backend/ directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --- Core ---
    APP_NAME: str = "SecurePOS Audit Ledger"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # --- Database ---
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'securepos.db'}"

    # --- Identity ---
    ADMIN_ADDRESS: str = "lsk24cd35u4jdq8szo4pnsqe5dsxwrnazyqqqg5eu"
    SEED_DEMO_USERS: bool = False
    ADDRESS_PREFIX: str = "lsk"
    ADDRESS_LENGTH: int = 41

    # --- Integrity ---
    HASH_ALGORITHM: str = "sha256"

    # --- Uploads ---
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    ALLOWED_EXTENSIONS: list[str] = [".csv", ".json", ".txt", ".xlsx"]
    STORAGE_PATH: str = str(BASE_DIR / "storage")
    KEEP_UPLOADS: bool = True

    # --- Security ---
    CORS_ORIGINS: list[str] = ["*"]

    # --- Logging ---
    LOG_DIR: str = str(BASE_DIR / "logs")
    LOG_LEVEL: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
