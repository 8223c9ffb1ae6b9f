# core/config.py
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {value!r}")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number, got {value!r}")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment"""
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///bookfriends.db"))
    book_provider_url: str = field(default_factory=lambda: os.getenv("BOOK_PROVIDER_URL", "http://localhost:8081/book/isbn"))
    book_provider_timeout: float = field(default_factory=lambda: _env_float("BOOK_PROVIDER_TIMEOUT", 10.0))
    dynamic_page_size: int = field(default_factory=lambda: _env_int("DYNAMIC_PAGE_SIZE", 10))
    write_back_workers: int = field(default_factory=lambda: _env_int("WRITE_BACK_WORKERS", 4))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings, read once from the environment"""
    return Settings()
