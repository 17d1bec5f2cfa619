"""
Calculator invocation.

A calculator produces the value for a cache miss. Two conventions are
supported:

- Callback style: ``calc(done)`` where ``done(error, data)`` must be called
  exactly once, synchronously or later from the event loop. A falsy error
  means success; ``done(error)`` alone reports a failure.
- Coroutine style: ``async def calc()`` returning the value or raising.
"""

import asyncio
import inspect
from collections.abc import Callable
from typing import Any

from redis_cacher.core.config.constants import Stage
from redis_cacher.core.exceptions import CalculationError
from redis_cacher.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)

Calculator = Callable[..., Any]
Completion = Callable[[Any, Any], None]


def null_calculator(done: Completion) -> None:
    """Calculator used when fetch() was given none: always yields None."""
    log_stage(logger, Stage.FETCH_COMPUTE, "Running fallback calculator that returns None", level="debug")
    done(None, None)


def as_exception(error: Any, cache_key: str | None = None) -> BaseException:
    """Reported errors that are not exceptions are wrapped in CalculationError."""
    if isinstance(error, BaseException):
        return error
    return CalculationError(
        f"Calculator reported an error: {error!r}", error=error, cache_key=cache_key
    )


async def run_calculator(calculator: Calculator, cache_key: str | None = None) -> Any:
    """
    Invoke a calculator and wait for its outcome.

    Args:
        calculator: Callback-style or coroutine calculator
        cache_key: Derived key, for diagnostics

    Returns:
        The data reported by the calculator

    Raises:
        The error reported by the calculator (see as_exception)
    """
    if inspect.iscoroutinefunction(calculator):
        return await calculator()

    future: asyncio.Future = asyncio.get_running_loop().create_future()

    def done(error=None, data=None):
        if future.done():
            log_stage(
                logger,
                Stage.FETCH_COMPUTE,
                "Calculator completion invoked more than once; ignoring",
                level="warning",
            )
            return
        if error:
            future.set_exception(as_exception(error, cache_key))
        else:
            future.set_result(data)

    try:
        result = calculator(done)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        if future.done():
            log_stage(
                logger,
                Stage.FETCH_COMPUTE,
                "Calculator raised after reporting a result",
                level="warning",
                error=str(e),
            )
        else:
            future.set_exception(e)

    return await future
