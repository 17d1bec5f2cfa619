"""
Unit Tests for create_cacher.
"""

import pytest
import redis.asyncio as redis

from redis_cacher import create_cacher
from redis_cacher.core.config.constants import ReadErrorPolicy
from redis_cacher.core.config.settings import Settings
from redis_cacher.core.exceptions import ConfigurationError
from redis_cacher.infrastructure.store.redis_store import RedisStore


@pytest.mark.unit
class TestCreateCacher:
    def test_store_or_redis_required(self):
        with pytest.raises(ConfigurationError) as exc_info:
            create_cacher()

        assert "suggestion" in exc_info.value.details

    def test_store_and_redis_exclusive(self, in_memory_store):
        with pytest.raises(ConfigurationError):
            create_cacher(in_memory_store, redis={"host": "localhost", "port": 6379})

    def test_defaults(self, in_memory_store):
        cacher = create_cacher(in_memory_store)

        assert cacher.store is in_memory_store
        assert cacher.config.prefix == "cacher:"
        assert cacher.config.expires == 300
        assert cacher.config.read_error_policy is ReadErrorPolicy.FAIL_OPEN

    def test_explicit_overrides(self, in_memory_store):
        cacher = create_cacher(in_memory_store, prefix="app:", expires=30, read_error_policy="fail_closed")

        assert cacher.config.prefix == "app:"
        assert cacher.config.expires == 30
        assert cacher.config.read_error_policy is ReadErrorPolicy.FAIL_CLOSED

    def test_empty_prefix_is_an_override(self, in_memory_store):
        assert create_cacher(in_memory_store, prefix="").config.prefix == ""

    def test_settings_as_base(self, in_memory_store):
        settings = Settings(_env_file=None, CACHER_PREFIX="svc:", CACHER_EXPIRES=90)

        cacher = create_cacher(in_memory_store, settings=settings, expires=10)

        assert cacher.config.prefix == "svc:"
        assert cacher.config.expires == 10

    def test_invalid_expires_rejected(self, in_memory_store):
        with pytest.raises(ConfigurationError):
            create_cacher(in_memory_store, expires=0)

    @pytest.mark.asyncio
    async def test_descriptor_creates_owned_redis_store(self):
        cacher = create_cacher(redis={"host": "localhost", "port": 6379})

        assert isinstance(cacher.store, RedisStore)
        assert cacher.store.owns_client is True
        await cacher.aclose()

    @pytest.mark.asyncio
    async def test_client_is_shared_not_owned(self):
        client = redis.Redis()
        try:
            cacher = create_cacher(redis=client)

            assert cacher.store.client is client
            assert cacher.store.owns_client is False
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_on_persist_hook_wired(self, in_memory_store):
        events = []
        cacher = create_cacher(in_memory_store, on_persist=lambda key, error: events.append(key))

        await cacher.fetch("item", lambda done: done(None, 1))
        await cacher.wait_for_writes()

        assert events == ["cacher:item"]
