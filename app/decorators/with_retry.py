from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import ParamSpec, TypeVar

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.configs import file_logger

logger = file_logger(getLogger(__name__))

P = ParamSpec("P")
T = TypeVar("T")


def _announce_retry(attempts: int) -> Callable[[RetryCallState], None]:
    def before_sleep(state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        delay = state.next_action.sleep if state.next_action else 0
        name = state.fn.__name__ if state.fn else "unknown"
        logger.warning(
            "%s failed (attempt %d of %d), retrying in %.2fs: %r",
            name,
            state.attempt_number,
            attempts,
            delay,
            error,
        )

    return before_sleep


def with_retry(
    on: tuple[type[Exception], ...],
    *,
    attempts: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async call with exponential backoff when it raises one of ``on``.

    The last error is re-raised unchanged once ``attempts`` calls have failed,
    so callers keep seeing the domain exception rather than a tenacity wrapper.

    Args:
        on: Exception types worth another attempt.
        attempts: Total number of calls, the first one included.
        base_delay: First backoff delay in seconds.
        max_delay: Upper bound for a single backoff delay in seconds.

    Returns:
        Decorator applying the retry policy.
    """
    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=base_delay, min=base_delay, max=max_delay),
        retry=retry_if_exception_type(on),
        before_sleep=_announce_retry(attempts),
        reraise=True,
    )
