"""
Core Module

Foundational components: configuration, logging, exceptions, and the
store protocol.
"""

from .exceptions import (
    CacherBaseError,
    CalculationError,
    ConfigurationError,
    InvalidArgumentError,
    StoreError,
    StoreUnavailableError,
    ValidationError,
)
from .interfaces import InMemoryStore, StoreAdapter
from .logging import (
    fetch_context,
    get_logger,
    log_stage,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "fetch_context",
    "log_stage",
    "CacherBaseError",
    "ConfigurationError",
    "ValidationError",
    "InvalidArgumentError",
    "CalculationError",
    "StoreError",
    "StoreUnavailableError",
    "InMemoryStore",
    "StoreAdapter",
]
