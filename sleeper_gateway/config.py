"""Configuration management for the Sleeper gateway."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from decouple import Choices
from decouple import config


class Environment(Enum):
    """Supported deployment environments."""

    DEVELOPMENT = "development"
    CI = "CI"
    PRODUCTION = "production"


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class Config:
    """Configuration for the Sleeper gateway."""

    # Environment configuration
    environment: Environment = Environment.DEVELOPMENT

    # HTTP server configuration
    host: str = "0.0.0.0"
    port: int = 3000

    # Sleeper API configuration
    sleeper_api_url: str = "https://api.sleeper.app/v1"
    sleeper_api_timeout_seconds: float = 10.0
    upstream_max_connections: int = 100

    # Response cache configuration
    cache_ttl_seconds: float = 30.0
    cache_max_entries: int = 1000

    # Bulk player snapshot
    player_snapshot_path: str = "/tmp/nfl.json"

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"

    def __post_init__(self):
        if self.sleeper_api_timeout_seconds <= 0:
            raise ValueError("SLEEPER_API_TIMEOUT_SECONDS must be positive")
        if self.cache_ttl_seconds <= 0:
            raise ValueError("CACHE_TTL_SECONDS must be positive")
        if self.cache_max_entries <= 0:
            raise ValueError("CACHE_MAX_ENTRIES must be positive")
        if self.upstream_max_connections <= 0:
            raise ValueError("UPSTREAM_MAX_CONNECTIONS must be positive")

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(
            config("ENVIRONMENT", default="development", cast=Choices(["development", "CI", "production"]))
        )

        return cls(
            environment=env,
            # HTTP server
            host=config("HOST", default="0.0.0.0"),
            port=config("PORT", default=3000, cast=int),
            # Sleeper API
            sleeper_api_url=config("SLEEPER_API_URL", default="https://api.sleeper.app/v1").rstrip("/"),
            sleeper_api_timeout_seconds=config("SLEEPER_API_TIMEOUT_SECONDS", default=10.0, cast=float),
            upstream_max_connections=config("UPSTREAM_MAX_CONNECTIONS", default=100, cast=int),
            # Cache
            cache_ttl_seconds=config("CACHE_TTL_SECONDS", default=30.0, cast=float),
            cache_max_entries=config("CACHE_MAX_ENTRIES", default=1000, cast=int),
            # Snapshot
            player_snapshot_path=config("PLAYER_SNAPSHOT_PATH", default="/tmp/nfl.json"),
            # Logging
            log_level=config("LOG_LEVEL", default="INFO", cast=Choices(LOG_LEVELS)),
            log_format=config("LOG_FORMAT", default="json", cast=Choices(["json", "text"])),
        )

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == Environment.CI

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION


_config: Optional[Config] = None


def init_config() -> Config:
    """Load configuration from the environment and keep it for the process."""
    global _config
    _config = Config.from_env()
    return _config


def get_config() -> Config:
    """Return the process configuration created by init_config()."""
    if _config is None:
        raise RuntimeError("Configuration not initialized. Call init_config() first.")
    return _config


def is_config_initialized() -> bool:
    return _config is not None


def reset_config() -> None:
    global _config
    _config = None
