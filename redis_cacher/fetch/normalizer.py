"""
Request normalization for fetch().

fetch() accepts one to three positional arguments:

    fetch(key)
    fetch(key, calculator)
    fetch(key, sub_key)
    fetch(key, sub_key, calculator)

The positional arguments are first classified into one of four request
shapes, then resolved into a FetchRequest by a single function. All
validation happens here, before any I/O.
"""

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

from redis_cacher.core.exceptions import InvalidArgumentError
from redis_cacher.fetch.calculator import Calculator, null_calculator
from redis_cacher.fetch.keys import MISSING, format_number


class FetchOptions(BaseModel):
    """
    Options of one fetch call.

    Unrecognized fields of a mapping key descriptor are kept in model_extra
    and otherwise ignored.
    """

    model_config = {"frozen": True, "extra": "allow"}

    title: StrictStr = Field(..., min_length=1, description="Base key, before the prefix")
    expires: StrictInt = Field(..., gt=0, description="TTL in seconds for a computed value")


# =============================================================================
# Request shapes
# =============================================================================


@dataclass(frozen=True)
class KeyOnly:
    key: Any


@dataclass(frozen=True)
class KeyAndSub:
    key: Any
    sub_key: Any


@dataclass(frozen=True)
class KeyAndCalculator:
    key: Any
    calculator: Any


@dataclass(frozen=True)
class KeyAndSubAndCalculator:
    key: Any
    sub_key: Any
    calculator: Any


RequestShape = KeyOnly | KeyAndSub | KeyAndCalculator | KeyAndSubAndCalculator


@dataclass
class FetchRequest:
    """One normalized fetch call. Lives only for the duration of the call."""

    options: FetchOptions
    calculator: Calculator
    sub_key: Any = field(default=MISSING)

    @property
    def has_sub_key(self) -> bool:
        return self.sub_key is not MISSING


def classify(args: tuple) -> RequestShape:
    """
    Map positional fetch() arguments onto a request shape.

    Raises:
        InvalidArgumentError: For zero or more than three arguments
    """
    if not args:
        raise InvalidArgumentError("At least a cache element name is required")
    if len(args) == 1:
        return KeyOnly(args[0])
    if len(args) == 2:
        if callable(args[1]):
            return KeyAndCalculator(args[0], args[1])
        return KeyAndSub(args[0], args[1])
    if len(args) == 3:
        return KeyAndSubAndCalculator(*args)
    raise InvalidArgumentError(
        "fetch() takes at most 3 arguments (key, sub_key, calculator)",
        details={"received": len(args)},
    )


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a key
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_options(key: Any, default_expires: int) -> FetchOptions:
    """
    Turn a key descriptor into FetchOptions.

    Strings and finite numbers become {"title": format_number(key)}; mappings
    must carry a string "title" and are filled with the default "expires".
    """
    if isinstance(key, str):
        raw = {"title": key, "expires": default_expires}
    elif _is_number(key):
        if isinstance(key, float) and not math.isfinite(key):
            raise InvalidArgumentError(
                "Numeric cache key must be a finite number", details={"key": repr(key)}
            )
        raw = {"title": format_number(key), "expires": default_expires}
    elif isinstance(key, Mapping):
        if not isinstance(key.get("title"), str):
            raise InvalidArgumentError(
                "Key descriptor mapping must contain a string 'title'",
                details={"keys": sorted(map(str, key))},
            )
        raw = {"expires": default_expires, **key}
    else:
        raise InvalidArgumentError(
            "Either a mapping or a string/number cache key should be passed as an argument",
            details={"type": type(key).__name__},
        )

    try:
        return FetchOptions.model_validate(raw)
    except PydanticValidationError as e:
        raise InvalidArgumentError(
            "Invalid fetch options",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


def validate_sub_key(sub_key: Any) -> Any:
    """Accept str, numbers and mappings as key sub-information."""
    if isinstance(sub_key, (str, Mapping)) or _is_number(sub_key):
        return sub_key
    raise InvalidArgumentError(
        "Key sub-information should be either a string, or a number or a mapping",
        details={"type": type(sub_key).__name__},
    )


def validate_calculator(calculator: Any) -> Calculator:
    if not callable(calculator):
        raise InvalidArgumentError(
            "Calculator should be a function that returns value to store in cache",
            details={"type": type(calculator).__name__},
        )
    return calculator


def normalize_request(args: tuple, default_expires: int) -> FetchRequest:
    """
    Normalize positional fetch() arguments.

    Args:
        args: Positional arguments exactly as passed to fetch()
        default_expires: Configured default TTL in seconds

    Returns:
        FetchRequest with validated options, sub-key and calculator

    Raises:
        InvalidArgumentError: On any malformed argument
    """
    shape = classify(args)
    options = normalize_options(shape.key, default_expires)

    if isinstance(shape, KeyOnly):
        return FetchRequest(options, null_calculator)
    if isinstance(shape, KeyAndCalculator):
        return FetchRequest(options, shape.calculator)
    if isinstance(shape, KeyAndSub):
        return FetchRequest(options, null_calculator, validate_sub_key(shape.sub_key))
    return FetchRequest(
        options,
        validate_calculator(shape.calculator),
        validate_sub_key(shape.sub_key),
    )
