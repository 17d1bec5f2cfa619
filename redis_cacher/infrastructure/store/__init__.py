"""
Store Module

Redis-backed implementation of the StoreAdapter protocol.
"""

from .redis_store import RedisStore

__all__ = ["RedisStore"]
