"""
Store Adapter Protocol

Abstract protocol for the backing key-value store of the cacher, plus a
TTL-aware in-memory implementation.

Architectural Decision: Protocol-based abstraction
- The fetch pipeline depends on two operations only: field read and an
  atomic "set fields + set expiry" batch
- Facilitates testing with in-memory and mock implementations
- Runtime validation with @runtime_checkable
"""

import time
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StoreAdapter(Protocol):
    """
    Protocol for cache entry storage.

    Implementations:
    - RedisStore: Production Redis-backed store (HGET, MULTI/HSET/EXPIRE/EXEC)
    - InMemoryStore: Testing/development store

    Implementations raise StoreUnavailableError on transport failures.
    """

    async def get_field(self, key: str, field: str) -> str | None:
        """
        Read one field of the entry stored at key.

        Returns:
            Field value, or None if the key or field is absent
        """
        ...

    async def set_fields_with_expiry(self, key: str, fields: dict[str, str], ttl: int) -> None:
        """
        Set fields on the entry at key and set its expiry, as one atomic batch.

        Args:
            key: Derived cache key
            fields: Field name → value
            ttl: Time-to-live in seconds
        """
        ...

    async def close(self) -> None:
        """Release resources held by the store."""
        ...


class InMemoryStore:
    """
    In-memory store implementing the StoreAdapter protocol.

    Entries are hashes (dict of field → str) with an optional deadline on
    the monotonic clock. Expired entries are dropped lazily on access.

    Note: NOT shared across processes. Use for tests and local development.
    """

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._hashes: dict[str, dict[str, str]] = {}
        self._deadlines: dict[str, float] = {}
        self.closed = False

    def _purge_if_expired(self, key: str) -> None:
        deadline = self._deadlines.get(key)
        if deadline is not None and self._clock() >= deadline:
            self._hashes.pop(key, None)
            self._deadlines.pop(key, None)

    async def get_field(self, key: str, field: str) -> str | None:
        self._purge_if_expired(key)
        return self._hashes.get(key, {}).get(field)

    async def set_fields_with_expiry(self, key: str, fields: dict[str, str], ttl: int) -> None:
        self._purge_if_expired(key)
        self._hashes.setdefault(key, {}).update({k: str(v) for k, v in fields.items()})
        self._deadlines[key] = self._clock() + ttl

    async def close(self) -> None:
        self.closed = True

    # -------------------------------------------------------------------------
    # Inspection helpers
    # -------------------------------------------------------------------------

    def seed(self, key: str, fields: dict[str, Any], ttl: int | None = None) -> None:
        """Write an entry directly, bypassing the fetch pipeline."""
        self._hashes[key] = {k: str(v) for k, v in fields.items()}
        if ttl is None:
            self._deadlines.pop(key, None)
        else:
            self._deadlines[key] = self._clock() + ttl

    def entry(self, key: str) -> dict[str, str] | None:
        """Return a copy of the live entry at key, or None."""
        self._purge_if_expired(key)
        entry = self._hashes.get(key)
        return dict(entry) if entry is not None else None

    def ttl(self, key: str) -> float:
        """Seconds left on key: -1 if it has no expiry, -2 if it does not exist."""
        self._purge_if_expired(key)
        if key not in self._hashes:
            return -2
        deadline = self._deadlines.get(key)
        if deadline is None:
            return -1
        return deadline - self._clock()

    def __len__(self) -> int:
        for key in list(self._hashes):
            self._purge_if_expired(key)
        return len(self._hashes)
