from .logger import (
    fetch_context,
    get_fetch_context,
    get_logger,
    log_stage,
    setup_logging,
)

__all__ = [
    "fetch_context",
    "get_fetch_context",
    "get_logger",
    "log_stage",
    "setup_logging",
]
