"""
Fetch observability: counters and stage logging for the fetch pipeline.
"""

from typing import Any, Literal

from redis_cacher.core.config.constants import Stage
from redis_cacher.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)

ReadOutcome = Literal["hit", "miss", "read_error"]


class FetchObserver:
    """
    Tracks fetch outcomes and logs them.

    Metrics Tracked:
    - hits, misses, store read errors
    - computations and calculation failures
    - background writes succeeded / failed
    """

    def __init__(self, logger_instance=None):
        self._logger = logger_instance or logger

        self._hits = 0
        self._misses = 0
        self._read_errors = 0
        self._computations = 0
        self._calculation_failures = 0
        self._writes_succeeded = 0
        self._writes_failed = 0

    def record_read(self, outcome: ReadOutcome, key: str, error: Exception | None = None) -> None:
        """
        Record the outcome of the store read.

        Logging Strategy:
        - hit / miss: debug
        - read_error: warning (the fetch continues as a miss or fails,
          depending on the read error policy)
        """
        if outcome == "hit":
            self._hits += 1
            log_stage(self._logger, Stage.FETCH_HIT, "Value found in cache", level="debug", cache_key=key)
        elif outcome == "miss":
            self._misses += 1
            log_stage(self._logger, Stage.FETCH_MISS, "No value in cache", level="debug", cache_key=key)
        else:
            self._read_errors += 1
            log_stage(
                self._logger,
                Stage.FETCH_READ,
                "Unable to retrieve value from cache",
                level="warning",
                cache_key=key,
                error=str(error),
            )

    def record_computation(self, key: str, error: BaseException | None = None) -> None:
        self._computations += 1
        if error is None:
            log_stage(self._logger, Stage.FETCH_COMPUTE, "Value calculated", level="debug", cache_key=key)
        else:
            self._calculation_failures += 1
            log_stage(
                self._logger,
                Stage.FETCH_COMPUTE,
                "Unable to calculate value",
                level="debug",
                cache_key=key,
                error=repr(error),
            )

    def record_persist(self, key: str, ttl: int, error: BaseException | None = None) -> None:
        if error is None:
            self._writes_succeeded += 1
            log_stage(self._logger, Stage.FETCH_PERSIST, "Value saved to cache", level="debug", cache_key=key, ttl=ttl)
        else:
            self._writes_failed += 1
            log_stage(
                self._logger,
                Stage.FETCH_PERSIST,
                "Unable to save value to cache",
                level="error",
                cache_key=key,
                error=repr(error),
            )

    def get_stats(self) -> dict[str, Any]:
        """
        Get fetch statistics.

        Returns:
            Dict with counters and the hit rate over all store reads
        """
        reads = self._hits + self._misses + self._read_errors
        return {
            "hits": self._hits,
            "misses": self._misses,
            "read_errors": self._read_errors,
            "computations": self._computations,
            "calculation_failures": self._calculation_failures,
            "writes_succeeded": self._writes_succeeded,
            "writes_failed": self._writes_failed,
            "total_reads": reads,
            "hit_rate": round(self._hits / reads, 3) if reads > 0 else 0.0,
        }
