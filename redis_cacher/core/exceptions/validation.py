"""
Validation Exceptions

Raised while normalizing the arguments of a fetch call, before any I/O.
"""

from redis_cacher.core.exceptions.base import CacherBaseError


class ValidationError(CacherBaseError):
    """Base class for argument validation errors."""
    pass


class InvalidArgumentError(ValidationError, TypeError):
    """
    Raised when fetch() is called with malformed or missing arguments.

    Common causes:
    - No arguments at all
    - Key descriptor that is not a string, number or mapping
    - Mapping key descriptor without a string title
    - Sub-key that is not a string, number or mapping
    - Calculator that is not callable

    Also a TypeError, so callers written against plain type checks keep working.
    """
    pass
