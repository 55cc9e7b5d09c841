"""Application configuration using environment variables."""
import os
from functools import lru_cache
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Server
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Plugin data
    CONFIG_PATH: Path = Path(os.getenv("CONFIG_PATH", "config/ReloadHotbar.json"))
    LANG_DIR: Path = Path(os.getenv("LANG_DIR", "lang"))
    DEFAULT_LANGUAGE: str = os.getenv("DEFAULT_LANGUAGE", "en")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
