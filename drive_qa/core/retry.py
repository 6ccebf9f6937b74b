"""
Retry with exponential backoff.

Generic coroutine helper shared by embedding and completion calls.
Wraps tenacity's AsyncRetrying so every upstream call uses one policy.

Dependencies: tenacity
System role: Transient upstream failure handling
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(
        f"{__name__}:retry_with_backoff - Attempt {retry_state.attempt_number} failed, "
        f"retrying in {delay:.3f}s: {type(exc).__name__}: {exc}"
    )


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    initial_delay: float = 0.1,
) -> T:
    """
    Await fn() until it succeeds or max_attempts is reached.

    The delay before retry n is initial_delay * 2 ** (n - 1) seconds.

    Args:
        fn: Zero-argument callable returning an awaitable
        max_attempts: Total number of invocations allowed (>= 1)
        initial_delay: Delay in seconds before the first retry

    Returns:
        The value produced by the first successful invocation

    Raises:
        ValueError: When max_attempts is less than 1
        Exception: The last error raised by fn once attempts are exhausted
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    try:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(Exception),
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=initial_delay, exp_base=2, min=0),
            before_sleep=_log_retry,
            reraise=True,
        ):
            with attempt:
                return await fn()
    except Exception as e:
        logger.error(
            f"{__name__}:retry_with_backoff - All {max_attempts} attempts failed: "
            f"{type(e).__name__}: {e}"
        )
        raise
