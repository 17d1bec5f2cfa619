"""
Store-Related Exceptions

Failures at the boundary with the backing key-value store.
"""

from redis_cacher.core.exceptions.base import CacherBaseError


class StoreError(CacherBaseError):
    """Base exception for store-related errors."""
    pass


class StoreUnavailableError(StoreError):
    """
    Raised when a read or write against the store fails.

    Common causes:
    - Redis server is down or unreachable
    - Operation timeout
    - Transaction aborted

    Reads degrade to a miss under ReadErrorPolicy.FAIL_OPEN; writes are only
    ever logged.
    """
    pass
