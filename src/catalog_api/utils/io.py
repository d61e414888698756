"""Bounded execution of blocking I/O from async code."""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from catalog_api.errors import SourceError

T = TypeVar("T")


async def run_blocking(func: Callable[..., T], *args: Any, timeout: float) -> T:
    """Run a blocking call in a worker thread with a timeout.

    On timeout or cancellation the awaiting coroutine stops waiting, but
    the worker thread runs to completion; callers that mutate shared
    state must hold their guard inside ``func``, not around this call.

    Args:
        func: Blocking callable
        *args: Positional arguments for ``func``
        timeout: Seconds to wait before giving up

    Returns:
        Whatever ``func`` returns

    Raises:
        SourceError: If ``func`` does not finish within ``timeout``
    """
    try:
        return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=timeout)
    except TimeoutError as e:
        name = getattr(func, "__qualname__", repr(func))
        raise SourceError(f"Timed out after {timeout}s waiting for {name}") from e
