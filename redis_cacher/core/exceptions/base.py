"""
Base Exception Class

This module contains ONLY the base exception class that all other exceptions inherit from.
All specialized exceptions are in their respective themed modules.
"""

from typing import Any


class CacherBaseError(Exception):
    """
    Base exception for all cacher errors.

    Attributes:
        message: Error message
        cache_key: Derived cache key the error relates to (if known)
        details: Additional error details (dict)

    Example:
        raise StoreUnavailableError(
            "Unable to read value from cache",
            cache_key="cacher:user:42",
            details={"operation": "hget"}
        )
    """

    def __init__(
        self, message: str, cache_key: str | None = None, details: dict[str, Any] | None = None
    ):
        self.message = message
        self.cache_key = cache_key
        self.details = (details or {}).copy()  # Create a copy to prevent external modification
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for logging.

        Returns:
            Dict with error_type, message, cache_key, and details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cache_key": self.cache_key,
            "details": self.details,
        }

    def with_context(self, **context) -> "CacherBaseError":
        """
        Add additional context to the error details.

        Returns:
            Self (for method chaining)
        """
        self.details.update(context)
        return self

    def __repr__(self) -> str:
        details_str = f", details={self.details}" if self.details else ""
        key_str = f", cache_key='{self.cache_key}'" if self.cache_key else ""
        return f"{self.__class__.__name__}(message='{self.message}'{key_str}{details_str})"

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        message: str | None = None,
        cache_key: str | None = None,
        **details
    ) -> "CacherBaseError":
        """
        Create an error from another exception.

        Useful for wrapping redis-py exceptions with cache context.

        Example:
            >>> try:
            ...     await client.hget(key, "value")
            ... except RedisError as e:
            ...     raise StoreUnavailableError.from_exception(e, cache_key=key)
        """
        error_message = message or str(exc)
        error_details = {
            "original_error": exc.__class__.__name__,
            "original_message": str(exc),
            **details
        }
        return cls(error_message, cache_key=cache_key, details=error_details)


class ConfigurationError(CacherBaseError):
    """Raised when the cacher or its store is configured incorrectly."""
    pass
