"""
Cache key derivation.

Final key = prefix + title [+ disambiguator], where the disambiguator is the
string form of the sub-key: strings as is, numbers as JavaScript renders
them, mappings as compact JSON with sorted keys so structurally equal
mappings always derive the same key.
"""

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

import orjson

from redis_cacher.core.exceptions import InvalidArgumentError

# Sentinel for "no sub-key given"; None is itself an invalid sub-key
MISSING: Any = type("Missing", (), {"__repr__": lambda self: "MISSING"})()

_MAPPING_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS


def format_number(number: int | float) -> str:
    """
    Render a number the way JavaScript's String() does.

    Keys are shared with writers in other runtimes, so 1.0 renders as "1",
    1e20 as "100000000000000000000" and 1e-7 as "1e-7".
    """
    if isinstance(number, int):
        return str(number)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"

    sign = "-" if number < 0 else ""
    # repr() yields the shortest round-tripping digits, as JavaScript does
    _, digit_tuple, exponent = Decimal(repr(abs(number))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    n = exponent + k

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        text = f"{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"
    return sign + text


def disambiguator(sub_key: Any) -> str:
    """
    Render a sub-key as the suffix appended to the base key.

    Raises:
        InvalidArgumentError: If a mapping sub-key holds values that cannot be
            rendered as JSON
    """
    if isinstance(sub_key, str):
        return sub_key
    if isinstance(sub_key, Mapping):
        try:
            return orjson.dumps(dict(sub_key), option=_MAPPING_OPTIONS).decode("utf-8")
        except TypeError as e:
            raise InvalidArgumentError(
                "Key sub-information mapping must contain JSON-compatible values",
                details={"original_message": str(e)},
            ) from e
    return format_number(sub_key)


def build_key(prefix: str, title: str, sub_key: Any = MISSING) -> str:
    """
    Build the derived store key.

    Args:
        prefix: Configured key namespace (e.g. "cacher:")
        title: Base key, already validated as a non-empty string
        sub_key: Optional disambiguator (str, number or mapping)

    Returns:
        The final key used against the store
    """
    key = prefix + title
    if sub_key is not MISSING:
        key += disambiguator(sub_key)
    return key
