"""
Redis Store Adapter

Architecture:
    RedisStore (StoreAdapter implementation)
        ├── Client construction (explicit: client, descriptor or settings)
        ├── Operations (HGET, MULTI HSET+EXPIRE EXEC) with error wrapping
        └── Health checks (ping latency)

Every cache entry is a hash with `value` and `updated` fields; the write is
a MULTI/EXEC transaction so the fields and the expiry land together.
"""

import time
from collections.abc import Mapping
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from redis_cacher.core.config.constants import Stage
from redis_cacher.core.config.settings import RedisSettings
from redis_cacher.core.exceptions import ConfigurationError, StoreUnavailableError
from redis_cacher.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)


def _as_port(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class RedisStore:
    """
    StoreAdapter over an async redis-py client.

    Usage:
        store = RedisStore(redis.Redis(decode_responses=True))
        store = RedisStore.from_descriptor({"host": "cache", "port": 6379})
        store = RedisStore.from_settings(get_settings().redis)

    Construction never opens a connection; redis-py connects lazily on the
    first command.
    """

    def __init__(self, client: redis.Redis, owns_client: bool = False):
        """
        Args:
            client: redis.asyncio client
            owns_client: Close the client in close()
        """
        self._client = client
        self._owns_client = owns_client

    @property
    def client(self) -> redis.Redis:
        return self._client

    @property
    def owns_client(self) -> bool:
        return self._owns_client

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_descriptor(cls, descriptor: Any) -> "RedisStore":
        """
        Build a store from a client or a connection descriptor.

        Resolution:
        - redis.asyncio.Redis instance → used as is (not owned)
        - mapping with "url" → Redis.from_url(url)
        - mapping with "socket" → unix socket connection
        - mapping with numeric "port" and "host" → TCP connection
        - optional "options" mapping is forwarded to the client

        Raises:
            ConfigurationError: For anything else; there is no default host
        """
        if isinstance(descriptor, redis.Redis):
            return cls(descriptor, owns_client=False)

        if not isinstance(descriptor, Mapping):
            raise ConfigurationError(
                "redis should be a Redis client or a connection descriptor mapping",
                details={"type": type(descriptor).__name__},
            )

        options = descriptor.get("options") or {}
        if not isinstance(options, Mapping):
            raise ConfigurationError("redis 'options' should be a mapping")
        kwargs = {"decode_responses": True, **options}

        port = _as_port(descriptor.get("port"))
        if descriptor.get("url"):
            client = redis.Redis.from_url(descriptor["url"], **kwargs)
            target = {"url": descriptor["url"]}
        elif descriptor.get("socket"):
            client = redis.Redis(unix_socket_path=descriptor["socket"], **kwargs)
            target = {"socket": descriptor["socket"]}
        elif port is not None and descriptor.get("host"):
            client = redis.Redis(host=descriptor["host"], port=port, **kwargs)
            target = {"host": descriptor["host"], "port": port}
        else:
            raise ConfigurationError(
                "redis descriptor needs a url, a socket, or a host and a numeric port",
                details={"keys": sorted(map(str, descriptor))},
            )

        log_stage(logger, Stage.STORE_CONNECT, "Redis store created", **target)
        return cls(client, owns_client=True)

    @classmethod
    def from_settings(cls, settings: RedisSettings) -> "RedisStore":
        """Build a store from environment-backed RedisSettings."""
        options = {
            "db": settings.REDIS_DB,
            "password": settings.REDIS_PASSWORD,
            "socket_timeout": settings.REDIS_SOCKET_TIMEOUT,
            "socket_connect_timeout": settings.REDIS_SOCKET_CONNECT_TIMEOUT,
            "health_check_interval": settings.REDIS_HEALTH_CHECK_INTERVAL,
        }
        if settings.REDIS_URL:
            return cls.from_descriptor({"url": settings.REDIS_URL, "options": options})
        if settings.REDIS_SOCKET:
            return cls.from_descriptor({"socket": settings.REDIS_SOCKET, "options": options})
        return cls.from_descriptor(
            {"host": settings.REDIS_HOST, "port": settings.REDIS_PORT, "options": options}
        )

    # -------------------------------------------------------------------------
    # StoreAdapter operations
    # -------------------------------------------------------------------------

    async def get_field(self, key: str, field: str) -> str | None:
        """
        HGET key field.

        Raises:
            StoreUnavailableError: If the command fails
        """
        try:
            value = await self._client.hget(key, field)
        except RedisError as e:
            log_stage(logger, Stage.STORE_READ, "Redis HGET failed", level="debug", key=key, error=str(e))
            raise StoreUnavailableError.from_exception(
                e, message=f"Redis HGET failed: {e}", cache_key=key, operation="hget"
            ) from e

        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set_fields_with_expiry(self, key: str, fields: dict[str, str], ttl: int) -> None:
        """
        MULTI; HSET key fields...; EXPIRE key ttl; EXEC.

        Raises:
            StoreUnavailableError: If the transaction fails
        """
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.hset(key, mapping=fields)
                pipe.expire(key, ttl)
                await pipe.execute()
        except RedisError as e:
            log_stage(logger, Stage.STORE_WRITE, "Redis MULTI failed", level="debug", key=key, error=str(e))
            raise StoreUnavailableError.from_exception(
                e, message=f"Redis MULTI failed: {e}", cache_key=key, operation="multi", ttl=ttl
            ) from e

    async def close(self) -> None:
        """Close the client if this store created it."""
        if self._owns_client:
            await self._client.aclose()
            log_stage(logger, Stage.STORE_CLOSE, "Redis store closed")

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    async def ping(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def health_check(self) -> dict[str, Any]:
        """
        Ping Redis and measure latency.

        Returns:
            Dict with status, ping latency and the error if unhealthy
        """
        health: dict[str, Any] = {"status": "healthy", "ping_latency_ms": None}
        try:
            start = time.perf_counter()
            await self._client.ping()
            health["ping_latency_ms"] = round((time.perf_counter() - start) * 1000, 2)
        except RedisError as e:
            health["status"] = "unhealthy"
            health["error"] = str(e)
        return health
