"""Timing helpers for thumbnail operations."""

import inspect
import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar, cast

from loguru import logger

P = ParamSpec("P")
R = TypeVar("R")


def timed(func: Callable[P, R]) -> Callable[P, R]:
    """Log how long ``func`` took, whether it succeeded or raised.

    Works for plain and ``async`` functions. Timings are logged at DEBUG so
    they stay out of normal output.

    Usage:
        @timed
        def image_thumbnail(...):
            ...
    """

    def log_elapsed(start_time: float, failed: bool) -> None:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        outcome = "failed after" if failed else "took"
        logger.debug(f"[PROFILE] {func.__qualname__} {outcome} {elapsed_ms:.1f}ms")

    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start_time = time.perf_counter()
            failed = True
            try:
                result = await cast(Callable[P, Awaitable[R]], func)(*args, **kwargs)
                failed = False
                return result
            finally:
                log_elapsed(start_time, failed)

        return cast(Callable[P, R], async_wrapper)

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        start_time = time.perf_counter()
        failed = True
        try:
            result = func(*args, **kwargs)
            failed = False
            return result
        finally:
            log_elapsed(start_time, failed)

    return wrapper
