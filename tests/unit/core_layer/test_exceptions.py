"""
Unit Tests for Core Exceptions

Tests the exception hierarchy and error context helpers.
"""

import pytest

from redis_cacher.core.exceptions import (
    CacherBaseError,
    CalculationError,
    ConfigurationError,
    InvalidArgumentError,
    StoreError,
    StoreUnavailableError,
    ValidationError,
)


@pytest.mark.unit
class TestCacherBaseError:
    """Test the base cacher exception class."""

    def test_base_error_creation(self):
        error = CacherBaseError("Test message")
        assert str(error) == "Test message"

    def test_base_error_default_values(self):
        error = CacherBaseError("Test")

        assert error.details == {}
        assert error.cache_key is None

    def test_details_are_copied(self):
        details = {"operation": "hget"}
        error = CacherBaseError("Test", details=details)
        details["operation"] = "changed"

        assert error.details == {"operation": "hget"}

    def test_to_dict(self):
        error = StoreUnavailableError("down", cache_key="cacher:item", details={"operation": "hget"})

        assert error.to_dict() == {
            "error_type": "StoreUnavailableError",
            "message": "down",
            "cache_key": "cacher:item",
            "details": {"operation": "hget"},
        }

    def test_with_context_chains(self):
        error = ConfigurationError("bad").with_context(suggestion="pass a store")

        assert isinstance(error, ConfigurationError)
        assert error.details["suggestion"] == "pass a store"

    def test_repr_includes_key_and_details(self):
        error = CacherBaseError("Test", cache_key="cacher:x", details={"a": 1})

        assert repr(error) == "CacherBaseError(message='Test', cache_key='cacher:x', details={'a': 1})"

    def test_from_exception(self):
        original = ConnectionError("refused")
        error = StoreUnavailableError.from_exception(original, cache_key="cacher:item", operation="hget")

        assert isinstance(error, StoreUnavailableError)
        assert error.message == "refused"
        assert error.cache_key == "cacher:item"
        assert error.details == {
            "original_error": "ConnectionError",
            "original_message": "refused",
            "operation": "hget",
        }

    def test_from_exception_custom_message(self):
        error = StoreUnavailableError.from_exception(TimeoutError("slow"), message="Unable to read")

        assert str(error) == "Unable to read"


@pytest.mark.unit
class TestHierarchy:
    """Test exception inheritance."""

    def test_invalid_argument_is_validation_and_type_error(self):
        error = InvalidArgumentError("bad")

        assert isinstance(error, ValidationError)
        assert isinstance(error, CacherBaseError)
        assert isinstance(error, TypeError)

    def test_store_unavailable_is_store_error(self):
        assert issubclass(StoreUnavailableError, StoreError)
        assert issubclass(StoreError, CacherBaseError)

    def test_configuration_error_is_base_error(self):
        assert issubclass(ConfigurationError, CacherBaseError)

    def test_calculation_error_keeps_reported_value(self):
        error = CalculationError("failed", error={"code": 7}, cache_key="cacher:item")

        assert error.error == {"code": 7}
        assert error.cache_key == "cacher:item"
        assert isinstance(error, CacherBaseError)
