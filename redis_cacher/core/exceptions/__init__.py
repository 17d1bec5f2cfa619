"""
Exception Module

Structured exception hierarchy for the cacher.

Module Structure:
-----------------
- **base.py**: CacherBaseError base class + ConfigurationError
- **validation.py**: fetch() argument validation exceptions
- **calculation.py**: calculator failures
- **store.py**: store boundary exceptions

Usage:
------
```python
from redis_cacher.core.exceptions import InvalidArgumentError, StoreUnavailableError
```
"""

from redis_cacher.core.exceptions.base import CacherBaseError, ConfigurationError
from redis_cacher.core.exceptions.calculation import CalculationError
from redis_cacher.core.exceptions.store import StoreError, StoreUnavailableError
from redis_cacher.core.exceptions.validation import InvalidArgumentError, ValidationError

__all__ = [
    # Base
    "CacherBaseError",
    "ConfigurationError",
    # Validation
    "ValidationError",
    "InvalidArgumentError",
    # Calculation
    "CalculationError",
    # Store
    "StoreError",
    "StoreUnavailableError",
]
