"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from redis_cacher.fetch.cacher import Cacher, CacherConfig  # noqa: E402
from tests.test_fixtures.store_factory import TEST_PREFIX, FakeClock, StoreTestFactory  # noqa: E402


# ============================================================================
# Environment-Based Integration Toggles
# ============================================================================


@pytest.fixture(scope="session")
def use_real_redis():
    """Check if real Redis should be used for integration tests."""
    return os.getenv("USE_REAL_REDIS", "0").lower() in ("1", "true", "yes")


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def clock():
    """Manually advanced clock shared by the in-memory store."""
    return FakeClock()


@pytest.fixture
def in_memory_store(clock):
    """TTL-aware in-memory store driven by the fake clock."""
    return StoreTestFactory.in_memory_store(clock=clock)


@pytest.fixture
def mock_store():
    """StoreAdapter mock that misses on every read and accepts every write."""
    return StoreTestFactory.mock_store()


# ============================================================================
# Cacher Fixtures
# ============================================================================


@pytest.fixture
def cacher(in_memory_store):
    """Cacher over the in-memory store with the test prefix."""
    return Cacher(in_memory_store, CacherConfig(prefix=TEST_PREFIX))


@pytest.fixture
def make_cacher():
    """Build a Cacher over any store with the test prefix."""

    def _make(store, **kwargs):
        config_fields = {k: kwargs.pop(k) for k in ("expires", "read_error_policy") if k in kwargs}
        return Cacher(store, CacherConfig(prefix=TEST_PREFIX, **config_fields), **kwargs)

    return _make
