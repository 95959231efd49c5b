# ABOUTME: Transport retry logic using tenacity library
# ABOUTME: Retries only transient failures (timeouts, connection errors, HTTP 429) with exponential backoff

import functools
from collections.abc import Callable
from dataclasses import dataclass

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from wiki_facets.errors import (
    ApiResponseError,
    RateLimitError,
    TransportConnectionError,
    TransportError,
    TransportHTTPError,
    TransportTimeoutError,
)
from wiki_facets.utils.logging import get_logger

logger = get_logger(__name__)

TRANSIENT_ERRORS = (TransportTimeoutError, TransportConnectionError, RateLimitError)


@dataclass(frozen=True)
class RetryPolicy:
    """How many times, and how patiently, a transport call is attempted."""

    max_attempts: int = 3
    min_wait: float = 0.5
    max_wait: float = 8.0
    multiplier: float = 1.0


DEFAULT_POLICY = RetryPolicy()


def convert_exception(e: Exception) -> TransportError:
    """Convert httpx and decoding exceptions to the transport error hierarchy."""
    if isinstance(e, TransportError):
        return e
    if isinstance(e, httpx.TimeoutException):
        return TransportTimeoutError(f"Request timeout: {e}")
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        if status == 429:
            return RateLimitError(f"Rate limit exceeded: {e}", status_code=status)
        return TransportHTTPError(f"HTTP {status} from API: {e}", status_code=status)
    if isinstance(e, httpx.TransportError):
        return TransportConnectionError(f"Connection failed: {e}")
    if isinstance(e, ValueError):
        # json.JSONDecodeError is a ValueError
        return ApiResponseError(f"Malformed API response: {e}")
    return TransportError(f"API call failed: {e}")


def transport_retry(func: Callable):
    """Retry decorator for async transport methods.

    The policy is read from ``self.retry_policy`` on every call so a transport
    instance carries its own attempt count and backoff bounds.
    """

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        policy: RetryPolicy = getattr(self, "retry_policy", None) or DEFAULT_POLICY

        retrying = AsyncRetrying(
            stop=stop_after_attempt(policy.max_attempts),
            wait=wait_exponential(multiplier=policy.multiplier, min=policy.min_wait, max=policy.max_wait),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            before_sleep=_log_retry,
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                try:
                    return await func(self, *args, **kwargs)
                except TransportError:
                    raise
                except Exception as e:
                    raise convert_exception(e) from e

    return wrapper


def _log_retry(retry_state) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying transport call",
        attempt=retry_state.attempt_number,
        error=str(exc),
        error_type=type(exc).__name__ if exc else None,
    )
