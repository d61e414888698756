import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Collection source
    data_path: str = os.getenv("CATALOG_DATA_PATH", "data/items.json")
    io_timeout: float = float(os.getenv("CATALOG_IO_TIMEOUT", "5.0"))
    default_limit: int = int(os.getenv("CATALOG_DEFAULT_LIMIT", "20"))

    # Stats cache invalidation
    watch_enabled: bool = os.getenv("STATS_WATCH_ENABLED", "true").lower() == "true"
    watch_interval: float = float(os.getenv("STATS_WATCH_INTERVAL", "1.0"))

    # Redis (optional invalidation fan-out between workers)
    redis_url: str | None = os.getenv("REDIS_URL") or None
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    invalidation_channel: str = os.getenv("STATS_INVALIDATION_CHANNEL", "catalog:stats:invalidate")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "3001"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"
    api_prefix: str = os.getenv("API_PREFIX", "")
    cors_origins: str = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def redis_enabled(self) -> bool:
        """Whether invalidations are fanned out over Redis pub/sub."""
        return bool(self.redis_url)

    @property
    def cors_origin_list(self) -> list[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.io_timeout <= 0:
            raise ValueError("CATALOG_IO_TIMEOUT must be positive")

        if self.watch_interval <= 0:
            raise ValueError("STATS_WATCH_INTERVAL must be positive")

        if self.default_limit < 1:
            raise ValueError(f"CATALOG_DEFAULT_LIMIT must be at least 1, got {self.default_limit}")

        if self.api_prefix and not self.api_prefix.startswith("/"):
            raise ValueError(f"API_PREFIX must start with '/', got {self.api_prefix!r}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def setup_logging(level: str | None = None) -> None:
    """Configure application-wide logging to stdout."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_redis_client(settings: Settings) -> redis.Redis:
    """Create an asyncio Redis client instance."""
    if not settings.redis_url:
        raise RuntimeError("REDIS_URL is not configured")
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
