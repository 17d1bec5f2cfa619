"""
redis-cacher: cache-aside accessor over Redis.

Usage:
    from redis_cacher import create_cacher

    cacher = create_cacher(redis={"host": "localhost", "port": 6379})

    def calculate(done):
        done(None, expensive_call())

    value = await cacher.fetch("report", calculate)
"""

from redis_cacher.__version__ import __version__
from redis_cacher.core.config.constants import ReadErrorPolicy
from redis_cacher.core.exceptions import (
    CacherBaseError,
    CalculationError,
    ConfigurationError,
    InvalidArgumentError,
    StoreError,
    StoreUnavailableError,
    ValidationError,
)
from redis_cacher.core.interfaces.store import InMemoryStore, StoreAdapter
from redis_cacher.factory import create_cacher
from redis_cacher.fetch.cacher import Cacher, CacherConfig
from redis_cacher.infrastructure.store.redis_store import RedisStore

__all__ = [
    "__version__",
    "create_cacher",
    "Cacher",
    "CacherConfig",
    "ReadErrorPolicy",
    "StoreAdapter",
    "InMemoryStore",
    "RedisStore",
    "CacherBaseError",
    "ConfigurationError",
    "ValidationError",
    "InvalidArgumentError",
    "CalculationError",
    "StoreError",
    "StoreUnavailableError",
]
