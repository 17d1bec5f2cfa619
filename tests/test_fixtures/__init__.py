"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .store_factory import TEST_PREFIX, FakeClock, FakePipeline, StoreTestFactory

__all__ = ["TEST_PREFIX", "FakeClock", "FakePipeline", "StoreTestFactory"]
