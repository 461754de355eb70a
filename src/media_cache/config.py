import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


DEFAULT_CACHE_DIR = Path.home() / ".media_cache"
DEFAULT_CAPACITY = 100


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache
    cache_dir: Path = Path(os.getenv("MEDIA_CACHE_DIR", str(DEFAULT_CACHE_DIR))).expanduser()
    cache_capacity: int = int(os.getenv("MEDIA_CACHE_CAPACITY", str(DEFAULT_CAPACITY)))
    cache_backend: str = os.getenv("MEDIA_CACHE_BACKEND", "memory").lower()  # "memory" or "disk"
    store_strategy: str = os.getenv("MEDIA_CACHE_STORE_STRATEGY", "save_original").lower()

    # Fetching
    fetch_timeout: float = float(os.getenv("FETCH_TIMEOUT", "30.0"))
    fetch_user_agent: str = os.getenv("FETCH_USER_AGENT", "media-cache/0.1")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def uses_disk(self) -> bool:
        """Check if the configured backend is the on-disk one."""
        return self.cache_backend == "disk"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_capacity < 0:
            raise ValueError("MEDIA_CACHE_CAPACITY must be >= 0")

        if self.cache_backend not in ("memory", "disk"):
            raise ValueError(
                f"MEDIA_CACHE_BACKEND must be one of ['memory', 'disk'], got {self.cache_backend}"
            )

        if self.store_strategy not in ("save_original", "save_transformed"):
            raise ValueError(
                "MEDIA_CACHE_STORE_STRATEGY must be one of "
                f"['save_original', 'save_transformed'], got {self.store_strategy}"
            )

        if self.fetch_timeout <= 0:
            raise ValueError("FETCH_TIMEOUT must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
