"""
Centralized Configuration Module using Pydantic Settings

Type-safe, environment-based configuration for the cacher. Nothing here is
read implicitly: callers load settings with get_settings() and hand the
result to create_cacher() or RedisStore.from_settings().

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at load time (fail fast on misconfiguration)
- Easy testing with override mechanisms
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from redis_cacher.core.config.constants import DEFAULT_EXPIRES, DEFAULT_PREFIX, ReadErrorPolicy

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _validate_log_level(v: str) -> str:
    if v.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {VALID_LOG_LEVELS}")
    return v.upper()


class RedisSettings(BaseSettings):
    """
    Redis connection configuration.

    Resolution order used by RedisStore.from_settings():
    REDIS_URL, then REDIS_SOCKET, then REDIS_HOST/REDIS_PORT.
    """

    REDIS_URL: str | None = Field(default=None, description="Full redis:// or unix:// URL")
    REDIS_SOCKET: str | None = Field(default=None, description="Unix socket path")
    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class CacherSettings(BaseSettings):
    """Cache-aside behaviour: key namespace, default TTL and read error policy."""

    CACHER_PREFIX: str = Field(default=DEFAULT_PREFIX, description="Prefix for every derived key")
    CACHER_EXPIRES: int = Field(default=DEFAULT_EXPIRES, gt=0, description="Default TTL in seconds")
    CACHER_READ_ERROR_POLICY: ReadErrorPolicy = Field(
        default=ReadErrorPolicy.FAIL_OPEN,
        description="fail_open treats store read errors as misses, fail_closed raises them",
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    Architectural Decision: structlog for production-grade logging
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        return _validate_log_level(v)

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    Usage:
        from redis_cacher.core.config.settings import get_settings

        settings = get_settings()
        prefix = settings.cacher.CACHER_PREFIX
        redis_host = settings.redis.REDIS_HOST
    """

    # Redis settings
    REDIS_URL: str | None = Field(default=None, description="Full redis:// or unix:// URL")
    REDIS_SOCKET: str | None = Field(default=None, description="Unix socket path")
    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    # Cacher settings
    CACHER_PREFIX: str = Field(default=DEFAULT_PREFIX, description="Prefix for every derived key")
    CACHER_EXPIRES: int = Field(default=DEFAULT_EXPIRES, gt=0, description="Default TTL in seconds")
    CACHER_READ_ERROR_POLICY: ReadErrorPolicy = Field(
        default=ReadErrorPolicy.FAIL_OPEN,
        description="fail_open treats store read errors as misses, fail_closed raises them",
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        return _validate_log_level(v)

    # Nested configuration views
    @property
    def redis(self) -> "RedisSettings":
        """Get Redis settings."""
        return RedisSettings(
            REDIS_URL=self.REDIS_URL,
            REDIS_SOCKET=self.REDIS_SOCKET,
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_HEALTH_CHECK_INTERVAL=self.REDIS_HEALTH_CHECK_INTERVAL,
        )

    @property
    def cacher(self) -> "CacherSettings":
        """Get cacher settings."""
        return CacherSettings(
            CACHER_PREFIX=self.CACHER_PREFIX,
            CACHER_EXPIRES=self.CACHER_EXPIRES,
            CACHER_READ_ERROR_POLICY=self.CACHER_READ_ERROR_POLICY,
        )

    @property
    def logging(self) -> "LoggingSettings":
        """Get logging settings."""
        return LoggingSettings(LOG_LEVEL=self.LOG_LEVEL, LOG_FORMAT=self.LOG_FORMAT)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
    )


# Global settings instance (lazy singleton)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
