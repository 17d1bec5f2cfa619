"""
Cache-aside accessor.

Architecture:
    Cacher (Public API: fetch)
        ├── normalize_request (argument shapes → FetchRequest)
        ├── build_key (prefix + title [+ sub-key])
        ├── StoreAdapter (HGET / MULTI HSET+EXPIRE)
        ├── run_calculator (callback or coroutine calculators)
        ├── serializer (JSON with raw-text fallback)
        └── FetchObserver (counters & logging)

Protocol of one fetch:
    1. Normalize arguments (InvalidArgumentError, no I/O)
    2. Read the `value` field of the derived key
    3. Hit → decode and return
    4. Miss → run the calculator, return its data, then persist it in a
       background task (value + updated, expiry) without blocking the caller

Concurrent misses on the same key each compute and each write; the last
write wins.
"""

import asyncio
import inspect
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from redis_cacher.core.config.constants import (
    DEFAULT_EXPIRES,
    DEFAULT_PREFIX,
    NULL_PAYLOAD,
    UPDATED_FIELD,
    VALUE_FIELD,
    ReadErrorPolicy,
    Stage,
)
from redis_cacher.core.config.settings import Settings
from redis_cacher.core.exceptions import ConfigurationError, StoreUnavailableError
from redis_cacher.core.interfaces.store import StoreAdapter
from redis_cacher.core.logging.logger import fetch_context, get_logger, log_stage
from redis_cacher.fetch.calculator import run_calculator
from redis_cacher.fetch.keys import build_key
from redis_cacher.fetch.normalizer import normalize_request
from redis_cacher.fetch.observer import FetchObserver
from redis_cacher.fetch.serializer import decode, encode

logger = get_logger(__name__)

PersistHook = Callable[[str, BaseException | None], Any]


@dataclass(frozen=True)
class CacherConfig:
    """
    Construction-time configuration of a Cacher.

    Attributes:
        prefix: Prepended to every derived key
        expires: Default TTL in seconds for computed values
        read_error_policy: What a failed store read means for the caller
    """

    prefix: str = DEFAULT_PREFIX
    expires: int = DEFAULT_EXPIRES
    read_error_policy: ReadErrorPolicy = ReadErrorPolicy.FAIL_OPEN

    def __post_init__(self):
        if not isinstance(self.prefix, str):
            raise ConfigurationError("prefix must be a string", details={"prefix": repr(self.prefix)})
        if isinstance(self.expires, bool) or not isinstance(self.expires, int) or self.expires <= 0:
            raise ConfigurationError(
                "expires must be a positive number of seconds", details={"expires": repr(self.expires)}
            )
        # Accept plain strings ("fail_closed") as well as the enum
        object.__setattr__(self, "read_error_policy", ReadErrorPolicy(self.read_error_policy))

    @classmethod
    def from_settings(cls, settings: Settings) -> "CacherConfig":
        cacher = settings.cacher
        return cls(
            prefix=cacher.CACHER_PREFIX,
            expires=cacher.CACHER_EXPIRES,
            read_error_policy=cacher.CACHER_READ_ERROR_POLICY,
        )


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


class Cacher:
    """
    Cache-aside accessor over a shared key-value store.

    Usage:
        cacher = Cacher(InMemoryStore(), CacherConfig(prefix="app:"))

        value = await cacher.fetch("report", lambda done: done(None, build_report()))
        value = await cacher.fetch({"title": "report", "expires": 60}, {"user": 42}, calc)

        await cacher.wait_for_writes()  # background persistence settled
        await cacher.aclose()

    The store handle is always injected; there is no default connection.
    """

    def __init__(
        self,
        store: StoreAdapter,
        config: CacherConfig | None = None,
        *,
        on_persist: PersistHook | None = None,
        owns_store: bool = False,
        observer: FetchObserver | None = None,
    ):
        """
        Args:
            store: Backing store (RedisStore, InMemoryStore, ...)
            config: Prefix, default TTL and read error policy
            on_persist: Called as on_persist(key, error_or_None) after every
                background write; may be a coroutine function
            owns_store: Close the store in aclose()
            observer: Counters and stage logging (a new one by default)
        """
        if store is None:
            raise ConfigurationError("A store must be provided to the cacher")

        self._store = store
        self._config = config or CacherConfig()
        self._on_persist = on_persist
        self._owns_store = owns_store
        self._observer = observer or FetchObserver()
        self._pending: set[asyncio.Task] = set()

    @property
    def config(self) -> CacherConfig:
        return self._config

    @property
    def store(self) -> StoreAdapter:
        return self._store

    @property
    def pending_writes(self) -> int:
        """Number of background writes not yet settled."""
        return len(self._pending)

    # -------------------------------------------------------------------------
    # Fetch
    # -------------------------------------------------------------------------

    async def fetch(self, *args: Any) -> Any:
        """
        Return the cached value for a key, or compute, return and cache it.

        Call shapes:
            fetch(key)
            fetch(key, calculator)
            fetch(key, sub_key)
            fetch(key, sub_key, calculator)

        Args:
            key: str, finite number, or mapping with "title" (and optionally
                "expires") describing the base key
            sub_key: str, number or mapping appended to the base key
            calculator: calc(done) calling done(error, data) once, or an
                async function returning the value

        Returns:
            The decoded cached value, the calculator's data, or None on a
            miss without calculator

        Raises:
            InvalidArgumentError: Malformed arguments (before any I/O)
            CalculationError / the calculator's exception: Reported failure
            StoreUnavailableError: Store read failed and the read error
                policy is FAIL_CLOSED
        """
        log_stage(logger, Stage.FETCH_NORMALIZE, "Normalizing fetch arguments", level="debug", args=len(args))
        request = normalize_request(args, self._config.expires)
        key = build_key(self._config.prefix, request.options.title, request.sub_key)

        with fetch_context(key):
            payload = await self._read(key)
            if payload is not None:
                return decode(payload)

            log_stage(logger, Stage.FETCH_COMPUTE, "Calculating value", level="debug")
            try:
                data = await run_calculator(request.calculator, key)
            except Exception as e:
                self._observer.record_computation(key, e)
                raise
            self._observer.record_computation(key)

            # The caller gets data before the write is attempted
            self._schedule_persist(key, data, request.options.expires)
            return data

    async def _read(self, key: str) -> str | None:
        """Read the payload at key; None means "compute"."""
        try:
            payload = await self._store.get_field(key, VALUE_FIELD)
        except StoreUnavailableError as e:
            return self._read_failed(key, e)
        except Exception as e:
            error = StoreUnavailableError.from_exception(
                e, message="Unable to retrieve value from cache", cache_key=key
            )
            error.__cause__ = e
            return self._read_failed(key, error)

        if payload is None or payload == NULL_PAYLOAD:
            self._observer.record_read("miss", key)
            return None

        self._observer.record_read("hit", key)
        return payload

    def _read_failed(self, key: str, error: StoreUnavailableError) -> None:
        self._observer.record_read("read_error", key, error)
        if self._config.read_error_policy is ReadErrorPolicy.FAIL_CLOSED:
            raise error
        return None

    # -------------------------------------------------------------------------
    # Background persistence
    # -------------------------------------------------------------------------

    def _schedule_persist(self, key: str, data: Any, ttl: int) -> None:
        task = asyncio.create_task(self._persist(key, data, ttl))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _persist(self, key: str, data: Any, ttl: int) -> None:
        error: BaseException | None = None
        try:
            fields = {VALUE_FIELD: encode(data), UPDATED_FIELD: str(now_ms())}
            await self._store.set_fields_with_expiry(key, fields, ttl)
        except Exception as e:
            error = e

        self._observer.record_persist(key, ttl, error)
        await self._notify_persist(key, error)

    async def _notify_persist(self, key: str, error: BaseException | None) -> None:
        if self._on_persist is None:
            return
        try:
            result = self._on_persist(key, error)
            if inspect.isawaitable(result):
                await result
        except Exception as hook_error:
            log_stage(
                logger,
                Stage.FETCH_PERSIST,
                "on_persist hook failed",
                level="error",
                cache_key=key,
                error=repr(hook_error),
            )

    async def wait_for_writes(self) -> None:
        """Wait until every background write started so far has settled."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # -------------------------------------------------------------------------
    # Monitoring & lifecycle
    # -------------------------------------------------------------------------

    def stats(self) -> dict[str, Any]:
        """
        Get fetch statistics.

        Returns:
            Observer counters plus pending writes and configuration
        """
        return {
            **self._observer.get_stats(),
            "pending_writes": self.pending_writes,
            "prefix": self._config.prefix,
            "default_expires": self._config.expires,
            "read_error_policy": self._config.read_error_policy.value,
        }

    async def aclose(self) -> None:
        """Wait for pending writes, then close the store if this cacher owns it."""
        await self.wait_for_writes()
        if self._owns_store:
            await self._store.close()
            log_stage(logger, Stage.STORE_CLOSE, "Cacher store closed", level="debug")

    async def __aenter__(self) -> "Cacher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
