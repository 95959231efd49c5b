# ABOUTME: Exception hierarchy shared by the transport, pagination engine, and page facade
# ABOUTME: Transport failures always propagate; absent facets are returned as empty values instead

from collections.abc import Mapping
from typing import Any


class WikiFacetsError(Exception):
    """Base exception for all wiki-facets errors."""

    pass


class TransportError(WikiFacetsError):
    """Raised when a single API round trip fails."""

    pass


class TransportHTTPError(TransportError):
    """Raised when the API answers with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(TransportHTTPError):
    """Raised when the API answers with HTTP 429."""

    pass


class TransportTimeoutError(TransportError):
    """Raised when a request times out."""

    pass


class TransportConnectionError(TransportError):
    """Raised when connecting to the API fails."""

    pass


class ApiResponseError(TransportError):
    """Raised when the response body is not JSON or carries an API 'error' object."""

    def __init__(self, message: str, code: str | None = None, payload: Mapping[str, Any] | None = None):
        super().__init__(message)
        self.code = code
        self.payload = payload


class ContinuationLoopError(WikiFacetsError):
    """Raised when a paged endpoint hands back a continuation token that was already issued."""

    pass


class PageNotFoundError(WikiFacetsError):
    """Raised when a title or page id does not resolve to an existing page."""

    pass
