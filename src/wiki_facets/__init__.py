# ABOUTME: wiki-facets: async accessors for MediaWiki page facets
# ABOUTME: Re-exports the client, page facade, pagination engine, and error types

from wiki_facets.client import Wiki
from wiki_facets.core import (
    Batch,
    Coordinates,
    Cursor,
    ImageCandidate,
    InfoboxData,
    LangLink,
    PageReference,
    Section,
    aggregate,
    paginate,
    resolve_main_image,
)
from wiki_facets.errors import (
    ApiResponseError,
    ContinuationLoopError,
    PageNotFoundError,
    RateLimitError,
    TransportConnectionError,
    TransportError,
    TransportHTTPError,
    TransportTimeoutError,
    WikiFacetsError,
)
from wiki_facets.page import WikiPage
from wiki_facets.transport import WikiTransport

__all__ = [
    # Client
    "Wiki",
    "WikiPage",
    "WikiTransport",
    # Engine
    "Batch",
    "Cursor",
    "aggregate",
    "paginate",
    "resolve_main_image",
    # Models
    "Coordinates",
    "ImageCandidate",
    "InfoboxData",
    "LangLink",
    "PageReference",
    "Section",
    # Errors
    "ApiResponseError",
    "ContinuationLoopError",
    "PageNotFoundError",
    "RateLimitError",
    "TransportConnectionError",
    "TransportError",
    "TransportHTTPError",
    "TransportTimeoutError",
    "WikiFacetsError",
]
