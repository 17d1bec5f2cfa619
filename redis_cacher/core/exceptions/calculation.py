"""
Calculation Exceptions
"""

from typing import Any

from redis_cacher.core.exceptions.base import CacherBaseError


class CalculationError(CacherBaseError):
    """
    Raised when a calculator reports a failure that is not an exception.

    Calculators that report an Exception instance have it raised unchanged;
    anything else passed as the error argument (a string, an error code)
    is wrapped here and kept on `error`.
    """

    def __init__(self, message: str, error: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.error = error
