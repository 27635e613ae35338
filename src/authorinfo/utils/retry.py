# ABOUTME: Retry policy for HTTP transport failures using tenacity
# ABOUTME: Exponential backoff for connection problems; status errors are never retried

from collections.abc import Callable
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from authorinfo.utils.logging import get_logger

logger = get_logger(__name__)

# Failures worth another attempt: the request never produced a response
RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (httpx.TransportError,)


def _log_retry(retry_state: RetryCallState) -> None:
    """Tenacity before_sleep hook."""
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying HTTP request",
        attempt=retry_state.attempt_number,
        error=str(error),
        error_type=type(error).__name__ if error else None,
    )


def get_retry_kwargs(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 5.0,
    multiplier: float = 1.0,
) -> dict[str, Any]:
    """Build the tenacity arguments shared by every HTTP retry loop."""
    return {
        "stop": stop_after_attempt(max_attempts),
        "wait": wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
        "retry": retry_if_exception_type(RETRYABLE_EXCEPTIONS),
        "before_sleep": _log_retry,
        "reraise": True,
    }


def http_retry(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 5.0,
    multiplier: float = 1.0,
):
    """Retry decorator for coroutines that perform a single HTTP exchange.

    After the last attempt the original transport exception is re-raised.
    """
    retry_kwargs = get_retry_kwargs(max_attempts, min_wait, max_wait, multiplier)

    def decorator(func: Callable):
        async def wrapper(*args, **kwargs):
            async for attempt in AsyncRetrying(**retry_kwargs):
                with attempt:
                    return await func(*args, **kwargs)

        return wrapper

    return decorator
