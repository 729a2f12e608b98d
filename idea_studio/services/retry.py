"""
Retry with exponential backoff for async operations
"""
import asyncio
from typing import Awaitable, Callable, TypeVar

from idea_studio.logging_config import logger


T = TypeVar("T")


class RetriesExhausted(Exception):
    """Raised when a retryable error persisted past the retry budget"""

    def __init__(self, attempts: int, last_error: BaseException):
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


def exponential_backoff(base_delay: float) -> Callable[[int], float]:
    """
    Delay schedule doubling from base_delay

    The returned function maps the 1-based retry number to a delay:
    base, 2 * base, 4 * base, ...
    """
    def backoff(retry_number: int) -> float:
        return base_delay * (2 ** (retry_number - 1))
    return backoff


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    is_retryable: Callable[[BaseException], bool],
    max_retries: int,
    backoff: Callable[[int], float],
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Run an async operation, retrying on retryable errors

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        is_retryable: Decides whether an error earns another attempt
        max_retries: Additional attempts allowed after the first one
        backoff: Maps the retry number (1-based) to a delay in seconds
        sleep: Awaitable sleep, replaceable in tests

    Returns:
        The first successful result

    Raises:
        RetriesExhausted: If every attempt failed with a retryable error
        Exception: Any non-retryable error, immediately
    """
    retry_number = 0

    while True:
        try:
            return await operation()
        except Exception as e:
            if not is_retryable(e):
                raise
            if retry_number >= max_retries:
                logger.error(f"Max retries exceeded after {retry_number + 1} attempts: {str(e)}")
                raise RetriesExhausted(retry_number + 1, e) from e

            retry_number += 1
            wait_time = backoff(retry_number)
            logger.warning(
                f"Retryable error ({type(e).__name__}), waiting {wait_time:.2f} seconds before retry {retry_number}"
            )
            await sleep(wait_time)
