# ABOUTME: Wiki client that resolves titles or page ids into WikiPage facades
# ABOUTME: Owns the transport (and its httpx client) and offers paginated full-text search

from typing import Any

import httpx

from wiki_facets.core.lookup import first_value, get_path
from wiki_facets.core.models import PageReference
from wiki_facets.core.pagination import Batch, Cursor, Transport, mediawiki_continuation, paginate, query_shape
from wiki_facets.errors import PageNotFoundError
from wiki_facets.page import WikiPage
from wiki_facets.transport import WikiTransport
from wiki_facets.utils.logging import get_logger


class Wiki:
    """Entry point for a single wiki.

    Either pass a ready transport (anything with an async ``call(params)``) or let
    the client build a WikiTransport from ``api_url``/``client`` and config.
    """

    def __init__(
        self,
        api_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        transport: Transport | None = None,
        **transport_options: Any,
    ):
        self._owns_transport = transport is None
        self.transport = transport or WikiTransport(api_url, client, **transport_options)
        self.logger = get_logger(__name__)

    async def _resolve(self, **params: Any) -> WikiPage:
        response = await self.transport.call(query_shape(params, prop="info", inprop="url"))
        entry = get_path(response, "query", "pages", first_value)
        if not entry or "missing" in entry or "invalid" in entry:
            raise PageNotFoundError(f"No such page: {params}")

        reference = PageReference.model_validate(entry)
        self.logger.debug("Resolved page", title=reference.title, pageid=reference.pageid)
        return WikiPage(reference, self.transport)

    async def page(self, title: str) -> WikiPage:
        """Resolve ``title`` (following redirects) to a WikiPage.

        Raises:
            PageNotFoundError: if the page does not exist
        """
        return await self._resolve(titles=title)

    async def page_by_id(self, pageid: int) -> WikiPage:
        """Resolve a numeric page id to a WikiPage.

        Raises:
            PageNotFoundError: if the page does not exist
        """
        return await self._resolve(pageids=pageid)

    async def search(self, query: str, aggregated: bool = False, limit: int = 50) -> list[str] | Cursor[str]:
        """Full-text search returning page titles; a Cursor over batches unless ``aggregated``."""

        def extract(response: dict[str, Any]) -> Batch[str]:
            return Batch(
                items=[hit["title"] for hit in response["query"]["search"]],
                continuation=mediawiki_continuation(response),
            )

        return await paginate(
            self.transport,
            query_shape(list="search", srsearch=query, srprop=""),
            extract,
            limit=limit,
            limit_param="srlimit",
            aggregated=aggregated,
        )

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self.transport, WikiTransport):
            await self.transport.close()

    async def __aenter__(self) -> "Wiki":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
