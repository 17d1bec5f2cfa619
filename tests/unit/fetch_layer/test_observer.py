"""
Unit Tests for FetchObserver.
"""

from unittest.mock import MagicMock

import pytest

from redis_cacher.fetch.observer import FetchObserver


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def observer(logger):
    return FetchObserver(logger_instance=logger)


@pytest.mark.unit
class TestFetchObserver:
    def test_initial_stats(self, observer):
        assert observer.get_stats() == {
            "hits": 0,
            "misses": 0,
            "read_errors": 0,
            "computations": 0,
            "calculation_failures": 0,
            "writes_succeeded": 0,
            "writes_failed": 0,
            "total_reads": 0,
            "hit_rate": 0.0,
        }

    def test_read_outcomes_counted(self, observer):
        observer.record_read("hit", "k")
        observer.record_read("hit", "k")
        observer.record_read("miss", "k")

        stats = observer.get_stats()
        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert stats["total_reads"] == 3
        assert stats["hit_rate"] == 0.667

    def test_read_error_logged_as_warning(self, observer, logger):
        observer.record_read("read_error", "cacher:k", ConnectionError("refused"))

        assert observer.get_stats()["read_errors"] == 1
        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["error"] == "refused"
        assert logger.warning.call_args.kwargs["cache_key"] == "cacher:k"

    def test_computations_and_failures(self, observer):
        observer.record_computation("k")
        observer.record_computation("k", ValueError("bad"))

        stats = observer.get_stats()
        assert stats["computations"] == 2
        assert stats["calculation_failures"] == 1

    def test_write_failure_logged_as_error(self, observer, logger):
        observer.record_persist("k", 300)
        observer.record_persist("k", 300, RuntimeError("down"))

        stats = observer.get_stats()
        assert stats["writes_succeeded"] == 1
        assert stats["writes_failed"] == 1
        logger.error.assert_called_once()
        assert logger.error.call_args.kwargs["stage"] == "FETCH.5_PERSIST"
