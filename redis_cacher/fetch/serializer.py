"""
Payload serialization for cache entries.

Values are stored as JSON text. Reads that do not parse as JSON (entries
written by other tools, plain strings) are returned as the raw text.
"""

from typing import Any

import orjson


def encode(value: Any) -> str:
    """
    Encode a value for the `value` field of a cache entry.

    Raises:
        orjson.JSONEncodeError: If the value is not JSON serializable
    """
    return orjson.dumps(value).decode("utf-8")


def decode(payload: str) -> Any:
    """Decode a stored payload, falling back to the raw text."""
    try:
        return orjson.loads(payload)
    except orjson.JSONDecodeError:
        return payload
