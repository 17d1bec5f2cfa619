"""
System Constants and Enumerations

Constants shared by the fetch pipeline and the store adapters: default
configuration values, the field layout of a cache entry, and stage
identifiers used in structured logs.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for the cache entry layout
- Type-safe enums for policies and log stages
"""

from enum import Enum

# ============================================================================
# Configuration Defaults
# ============================================================================

DEFAULT_PREFIX = "cacher:"
DEFAULT_EXPIRES = 300  # seconds

# ============================================================================
# Cache Entry Layout
# ============================================================================

# Every entry is a Redis hash with these two fields
VALUE_FIELD = "value"
UPDATED_FIELD = "updated"  # epoch milliseconds

# A stored JSON null is indistinguishable from "nothing cached"
NULL_PAYLOAD = "null"


class ReadErrorPolicy(str, Enum):
    """
    What a failed store read means for the caller.

    FAIL_OPEN: treat the failure as a miss and compute (default)
    FAIL_CLOSED: surface StoreUnavailableError to the caller
    """

    FAIL_OPEN = "fail_open"
    FAIL_CLOSED = "fail_closed"


class Stage(str, Enum):
    """
    Stage identifiers for structured logging.

    Format: {AREA}.{STEP}_{DESCRIPTIVE_NAME}

    Examples:
        log_stage(logger, Stage.FETCH_HIT, "Cache hit", cache_key=key)
    """

    # Fetch lifecycle
    FETCH_NORMALIZE = "FETCH.1_NORMALIZE"
    FETCH_READ = "FETCH.2_STORE_READ"
    FETCH_HIT = "FETCH.3_CACHE_HIT"
    FETCH_MISS = "FETCH.3_CACHE_MISS"
    FETCH_COMPUTE = "FETCH.4_COMPUTE"
    FETCH_PERSIST = "FETCH.5_PERSIST"

    # Store boundary
    STORE_CONNECT = "STORE.1_CONNECT"
    STORE_READ = "STORE.2_HGET"
    STORE_WRITE = "STORE.3_MULTI"
    STORE_CLOSE = "STORE.4_CLOSE"
