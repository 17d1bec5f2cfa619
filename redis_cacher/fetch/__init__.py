"""
Fetch Module

The cache-aside fetch pipeline: request normalization, key derivation,
payload serialization, calculator invocation and the orchestrating Cacher.
"""

from .cacher import Cacher, CacherConfig
from .calculator import null_calculator, run_calculator
from .keys import MISSING, build_key
from .normalizer import FetchOptions, FetchRequest, normalize_request
from .observer import FetchObserver
from .serializer import decode, encode

__all__ = [
    "Cacher",
    "CacherConfig",
    "FetchObserver",
    "FetchOptions",
    "FetchRequest",
    "MISSING",
    "build_key",
    "decode",
    "encode",
    "normalize_request",
    "null_calculator",
    "run_calculator",
]
