"""Retry utilities with exponential backoff"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def exponential_backoff(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    initial_delay: float = 0.5,
    max_delay: float = 10.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    exceptions: tuple[type[BaseException], ...] = (Exception,),
) -> T:
    """
    Await func() until it succeeds, sleeping exponentially longer between attempts

    Only exceptions listed in `exceptions` are retried; anything else, and
    the last retryable failure, is re-raised unmodified.

    Args:
        func: Zero-argument coroutine function
        max_attempts: Total attempts including the first one
        initial_delay: Delay before the second attempt (seconds)
        max_delay: Upper bound for any single delay (seconds)
        backoff_factor: Multiplier applied to the delay after each failure
        jitter: Add +/-25% random jitter to each delay
        exceptions: Exception types considered transient

    Example:
        >>> await exponential_backoff(
        ...     lambda: client.request("products", "public", "GET", {}),
        ...     exceptions=(ccxt.NetworkError,),
        ... )
    """
    delay = initial_delay

    for attempt in range(1, max_attempts + 1):
        try:
            return await func()
        except exceptions as e:
            if attempt >= max_attempts:
                logger.error(f"Request failed after {max_attempts} attempts: {e}")
                raise

            actual_delay = delay
            if jitter:
                jitter_range = delay * 0.25
                actual_delay = delay + random.uniform(-jitter_range, jitter_range)
            actual_delay = min(actual_delay, max_delay)

            logger.warning(
                f"Attempt {attempt}/{max_attempts} failed: {e}. "
                f"Retrying in {actual_delay:.2f} seconds..."
            )
            await asyncio.sleep(actual_delay)
            delay *= backoff_factor

    raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
