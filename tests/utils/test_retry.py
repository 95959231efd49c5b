# ABOUTME: Tests for the transport retry decorator built on tenacity
# ABOUTME: Validates exception conversion and that only transient failures are retried

import httpx
import pytest

from wiki_facets.errors import (
    ApiResponseError,
    RateLimitError,
    TransportConnectionError,
    TransportError,
    TransportHTTPError,
    TransportTimeoutError,
)
from wiki_facets.utils.retry import RetryPolicy, convert_exception, transport_retry

REQUEST = httpx.Request("GET", "https://wiki.test/w/api.php")


def status_error(status: int) -> httpx.HTTPStatusError:
    response = httpx.Response(status, request=REQUEST)
    return httpx.HTTPStatusError(f"HTTP {status}", request=REQUEST, response=response)


class Flaky:
    """Minimal transport-like object failing with scripted errors before succeeding."""

    def __init__(self, errors, max_attempts: int = 3):
        self.errors = list(errors)
        self.retry_policy = RetryPolicy(max_attempts=max_attempts, min_wait=0, max_wait=0)
        self.calls = 0

    @transport_retry
    async def call(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


class TestConvertException:
    """Test mapping of httpx and decoding errors onto the transport hierarchy"""

    @pytest.mark.parametrize(
        "error,expected",
        [
            (httpx.ReadTimeout("read timed out", request=REQUEST), TransportTimeoutError),
            (httpx.ConnectError("connection refused", request=REQUEST), TransportConnectionError),
            (status_error(429), RateLimitError),
            (status_error(503), TransportHTTPError),
            (ValueError("Expecting value: line 1 column 1"), ApiResponseError),
            (RuntimeError("boom"), TransportError),
        ],
    )
    def test_mapping(self, error, expected):
        assert type(convert_exception(error)) is expected

    def test_status_code_is_kept(self):
        assert convert_exception(status_error(503)).status_code == 503

    def test_transport_errors_pass_through(self):
        error = ApiResponseError("badvalue", code="badvalue")
        assert convert_exception(error) is error


class TestTransportRetry:
    """Test the retry decorator behaviour"""

    @pytest.mark.asyncio
    async def test_success_first_try(self):
        flaky = Flaky([])

        assert await flaky.call() == "ok"
        assert flaky.calls == 1

    @pytest.mark.asyncio
    async def test_transient_failures_are_retried(self):
        flaky = Flaky([httpx.ConnectError("refused"), status_error(429)])

        assert await flaky.call() == "ok"
        assert flaky.calls == 3

    @pytest.mark.asyncio
    async def test_attempts_exhausted(self):
        flaky = Flaky([httpx.ReadTimeout("slow")] * 3, max_attempts=2)

        with pytest.raises(TransportTimeoutError):
            await flaky.call()
        assert flaky.calls == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error,expected",
        [
            (status_error(500), TransportHTTPError),
            (ApiResponseError("maxlag", code="maxlag"), ApiResponseError),
            (ValueError("not json"), ApiResponseError),
        ],
    )
    async def test_permanent_failures_are_not_retried(self, error, expected):
        flaky = Flaky([error])

        with pytest.raises(expected):
            await flaky.call()
        assert flaky.calls == 1

    @pytest.mark.asyncio
    async def test_original_exception_is_chained(self):
        original = httpx.ConnectError("refused")
        flaky = Flaky([original], max_attempts=1)

        with pytest.raises(TransportConnectionError) as exc_info:
            await flaky.call()
        assert exc_info.value.__cause__ is original
