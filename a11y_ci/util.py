import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar, cast

R = TypeVar("R")


def noop(*args: Any, **kwargs: Any) -> None:
    """Do nothing. Default for optional sinks and callbacks."""


def to_async_func(func: Callable[..., R]) -> Callable[..., Awaitable[R]]:
    """Convert a synchronous function to an asynchronous function.

    Args:
        func: The synchronous function to convert.

    Returns:
        An asynchronous function that runs the synchronous function in a thread.
    """

    if inspect.iscoroutinefunction(func):
        return cast(Callable[..., Awaitable[R]], func)  # Already async

    @functools.wraps(func)
    async def async_func(*args: Any, **kwargs: Any) -> R:
        return await asyncio.to_thread(func, *args, **kwargs)

    return async_func


def error_reason(error: BaseException) -> str:
    """Return the message of an exception, or its class name when it has none."""
    return str(error) or type(error).__name__
