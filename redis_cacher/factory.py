"""
Cacher construction.

create_cacher() is the single entry point that wires a store, configuration
and hooks together. A store must always be given explicitly, either as a
StoreAdapter or as a Redis client / connection descriptor.
"""

from dataclasses import replace
from typing import Any

from redis_cacher.core.config.constants import ReadErrorPolicy
from redis_cacher.core.config.settings import Settings
from redis_cacher.core.exceptions import ConfigurationError
from redis_cacher.core.interfaces.store import StoreAdapter
from redis_cacher.fetch.cacher import Cacher, CacherConfig, PersistHook
from redis_cacher.infrastructure.store.redis_store import RedisStore


def create_cacher(
    store: StoreAdapter | None = None,
    *,
    redis: Any = None,
    prefix: str | None = None,
    expires: int | None = None,
    read_error_policy: ReadErrorPolicy | str | None = None,
    settings: Settings | None = None,
    on_persist: PersistHook | None = None,
) -> Cacher:
    """
    Create a Cacher.

    Args:
        store: Any StoreAdapter implementation
        redis: redis.asyncio client or connection descriptor mapping
            (url / socket / host+port, optional options); used when no
            store is given
        prefix: Key namespace (default "cacher:")
        expires: Default TTL in seconds (default 300)
        read_error_policy: fail_open (default) or fail_closed
        settings: Base configuration; explicit arguments override it
        on_persist: Hook called after every background write

    Returns:
        Cacher ready to fetch

    Raises:
        ConfigurationError: If neither or both of store and redis are given,
            or the configuration is invalid

    Example:
        cacher = create_cacher(redis={"host": "localhost", "port": 6379}, prefix="app:")
        value = await cacher.fetch("answer", lambda done: done(None, 42))
    """
    if store is None and redis is None:
        raise ConfigurationError(
            "A store or a redis client/descriptor must be provided"
        ).with_context(suggestion="create_cacher(redis={'host': 'localhost', 'port': 6379})")
    if store is not None and redis is not None:
        raise ConfigurationError("Pass either store or redis, not both")

    owns_store = False
    if store is None:
        redis_store = RedisStore.from_descriptor(redis)
        store, owns_store = redis_store, redis_store.owns_client

    config = CacherConfig.from_settings(settings) if settings is not None else CacherConfig()
    overrides = {
        name: value
        for name, value in (
            ("prefix", prefix),
            ("expires", expires),
            ("read_error_policy", read_error_policy),
        )
        if value is not None
    }
    if overrides:
        config = replace(config, **overrides)

    return Cacher(store, config, on_persist=on_persist, owns_store=owns_store)
