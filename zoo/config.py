import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)
_CACHE_BACKENDS = frozenset({"memory", "redis"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Zoo API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Entity store
    database_url: str = "sqlite:///./zoo.db"
    database_pool_timeout: float = 10.0
    create_tables_on_startup: bool = True

    # Cache layer: "memory" (process-local) or "redis" (shared)
    cache_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "zoo"
    redis_socket_timeout: float = 2.0

    # Per-region cache policy
    cache_animals_ttl_seconds: float = 600
    cache_animals_max_entries: int = 5_000
    cache_rooms_ttl_seconds: float = 600
    cache_rooms_max_entries: int = 2_000
    cache_favorites_ttl_seconds: float = 60
    cache_favorites_max_entries: int = 100

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_cache: str = "INFO"            # cache backends (memory / redis)

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Fall back to the in-process cache when an unknown backend is configured."""
        if self.cache_backend.lower() not in _CACHE_BACKENDS:
            _config_logger.warning(
                "Unknown cache backend '%s'; using in-memory cache", self.cache_backend
            )
            object.__setattr__(self, "cache_backend", "memory")
        else:
            object.__setattr__(self, "cache_backend", self.cache_backend.lower())


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
