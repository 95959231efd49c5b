# ABOUTME: Async transport performing one MediaWiki action API round trip per call
# ABOUTME: Applies default query parameters, decodes JSON, and maps failures onto TransportError

from collections.abc import Mapping
from typing import Any

import httpx

from wiki_facets.config import get_config
from wiki_facets.errors import ApiResponseError
from wiki_facets.utils.logging import get_logger, log_api_call
from wiki_facets.utils.retry import RetryPolicy, transport_retry

DEFAULT_PARAMS: dict[str, Any] = {"format": "json", "action": "query", "redirects": ""}


class WikiTransport:
    """Thin async wrapper around an httpx client pointed at a wiki's ``api.php``."""

    def __init__(
        self,
        api_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        *,
        user_agent: str | None = None,
        origin: str | None = None,
        timeout: float | None = None,
        retry_policy: RetryPolicy | None = None,
        headers: Mapping[str, str] | None = None,
    ):
        config = get_config()
        self.api_url = api_url or config.api_url
        self.origin = origin if origin is not None else config.origin
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=config.retry_attempts,
            min_wait=config.retry_min_wait,
            max_wait=config.retry_max_wait,
        )

        request_headers = {"User-Agent": user_agent or config.user_agent}
        if headers:
            request_headers.update(headers)

        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers=request_headers,
            timeout=timeout if timeout is not None else config.request_timeout,
        )
        self.logger = get_logger(__name__)

    def build_params(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Merge caller parameters over the API defaults."""
        merged = {**DEFAULT_PARAMS, **params}
        if self.origin:
            merged["origin"] = self.origin
        return merged

    @transport_retry
    @log_api_call("mediawiki")
    async def call(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Issue one GET against the API and return the decoded JSON body.

        Raises:
            TransportError: on HTTP, network, decoding, or API-level errors
        """
        response = await self.http_client.get(self.api_url, params=self.build_params(params))
        response.raise_for_status()

        body = response.json()
        if not isinstance(body, dict):
            raise ApiResponseError(f"Expected a JSON object from {self.api_url}, got {type(body).__name__}")

        error = body.get("error")
        if error:
            code = error.get("code") if isinstance(error, dict) else None
            info = error.get("info") if isinstance(error, dict) else str(error)
            raise ApiResponseError(info or "API returned an error", code=code, payload=body)

        for warning in (body.get("warnings") or {}).values():
            self.logger.debug("API warning", warning=warning)

        return body

    async def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "WikiTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
