# ABOUTME: WikiPage facade exposing a page's facets (links, images, infobox, coordinates ...) as async accessors
# ABOUTME: Builds per-facet query shapes and hands list endpoints to the pagination engine

import asyncio
import warnings
from collections.abc import Callable
from typing import Any

from wiki_facets.config import get_config
from wiki_facets.core.images import resolve_main_image
from wiki_facets.core.lookup import first_value, get_path
from wiki_facets.core.models import (
    Coordinates,
    FieldValue,
    ImageCandidate,
    InfoboxData,
    LangLink,
    PageReference,
    Section,
)
from wiki_facets.core.pagination import Batch, Cursor, Transport, mediawiki_continuation, paginate, query_shape
from wiki_facets.parsing import parse_content, parse_coordinates, parse_infobox
from wiki_facets.utils.logging import get_logger


class WikiPage:
    """Accessors for one page. Every call issues its own request(s); nothing is cached.

    Example:
        async with Wiki() as wiki:
            page = await wiki.page("Batman")
            links = await page.links()
            image = await page.main_image()
    """

    def __init__(self, raw: PageReference, transport: Transport):
        self.raw = raw
        self.transport = transport
        self.logger = get_logger(__name__).bind(title=raw.title, pageid=raw.pageid)

    @property
    def title(self) -> str:
        return self.raw.title

    @property
    def pageid(self) -> int | None:
        return self.raw.pageid

    def __repr__(self) -> str:
        return f"WikiPage(title={self.title!r}, pageid={self.pageid!r})"

    def _page_entry(self, response: dict[str, Any]) -> dict[str, Any]:
        """This page's object inside ``query.pages``; a missing envelope is a defect and raises."""
        pages = response["query"]["pages"]
        if self.pageid is not None and str(self.pageid) in pages:
            return pages[str(self.pageid)]
        return first_value(pages)

    async def _query_page(self, **params: Any) -> dict[str, Any]:
        response = await self.transport.call(query_shape(params, titles=self.title))
        return self._page_entry(response)

    def _page_titles(self, key: str) -> Callable[[dict[str, Any]], Batch[str]]:
        """Extractor for ``prop=<key>`` lists nested under the page object."""

        def extract(response: dict[str, Any]) -> Batch[str]:
            entry = self._page_entry(response)
            return Batch(
                items=[item["title"] for item in entry.get(key, [])],
                continuation=mediawiki_continuation(response),
            )

        return extract

    # Text

    async def html(self) -> str | None:
        """Rendered HTML of the page."""
        entry = await self._query_page(prop="revisions", rvprop="content", rvlimit=1, rvparse="")
        return get_path(entry, "revisions", 0, "*")

    async def raw_content(self) -> str | None:
        """Plain-text content of the whole page."""
        entry = await self._query_page(prop="extracts", explaintext="")
        return entry.get("extract")

    async def content(self) -> list[Section]:
        """Plain-text content split into nested sections."""
        return parse_content(await self.raw_content())

    sections = content

    async def summary(self) -> str | None:
        """Plain-text introduction of the page."""
        entry = await self._query_page(prop="extracts", explaintext="", exintro="")
        return entry.get("extract")

    # Images

    async def raw_images(self) -> list[ImageCandidate]:
        """Every image used on the page with its image-info records."""

        def extract(response: dict[str, Any]) -> Batch[ImageCandidate]:
            pages = get_path(response, "query", "pages") or {}
            return Batch(
                items=[ImageCandidate.model_validate(page) for page in pages.values()],
                continuation=mediawiki_continuation(response),
            )

        query = query_shape(generator="images", gimlimit="max", prop="imageinfo", iiprop="url", titles=self.title)
        return await paginate(self.transport, query, extract)  # type: ignore[return-value]

    async def images(self) -> list[str]:
        """URLs of every image on the page."""
        return [info.url for image in await self.raw_images() for info in image.imageinfo]

    async def main_image(self) -> str | None:
        """URL of the page's primary image, or None if it cannot be determined."""
        # A failing sibling cancels the other request
        try:
            async with asyncio.TaskGroup() as group:
                images_task = group.create_task(self.raw_images())
                fields_task = group.create_task(self._general_info())
        except ExceptionGroup as errors:
            raise errors.exceptions[0]
        images, fields = images_task.result(), fields_task.result()
        url = await resolve_main_image(images, fields, self.raw_info)
        self.logger.debug("Resolved main image", url=url, candidates=len(images))
        return url

    # Paginated lists

    async def links(self, aggregated: bool = True, limit: int | None = None) -> list[str] | Cursor[str]:
        """Titles of article-namespace pages linked from this page.

        Args:
            aggregated: Return every link (True) or a Cursor over batches (False)
            limit: Links requested per batch
        """
        query = query_shape(prop="links", plnamespace=0, titles=self.title)
        return await paginate(
            self.transport,
            query,
            self._page_titles("links"),
            limit=limit or get_config().default_limit,
            limit_param="pllimit",
            aggregated=aggregated,
        )

    async def categories(self, aggregated: bool = True, limit: int | None = None) -> list[str] | Cursor[str]:
        """Titles of the categories this page belongs to."""
        query = query_shape(prop="categories", titles=self.title)
        return await paginate(
            self.transport,
            query,
            self._page_titles("categories"),
            limit=limit or get_config().default_limit,
            limit_param="cllimit",
            aggregated=aggregated,
        )

    async def backlinks(self, aggregated: bool = True, limit: int | None = None) -> list[str] | Cursor[str]:
        """Titles of pages linking to this page."""

        def extract(response: dict[str, Any]) -> Batch[str]:
            return Batch(
                items=[link["title"] for link in response["query"]["backlinks"]],
                continuation=mediawiki_continuation(response),
            )

        query = query_shape(list="backlinks", bltitle=self.title)
        return await paginate(
            self.transport,
            query,
            extract,
            limit=limit or get_config().default_limit,
            limit_param="bllimit",
            aggregated=aggregated,
        )

    # Other facets

    async def references(self) -> list[str]:
        """External link URLs of the page."""
        entry = await self._query_page(prop="extlinks", ellimit="max")
        return [link["*"] for link in entry.get("extlinks", [])]

    async def langlinks(self) -> list[LangLink]:
        """Links to this page in other languages."""
        entry = await self._query_page(prop="langlinks", lllimit="max")
        return [LangLink(lang=link["lang"], title=link["*"]) for link in entry.get("langlinks", [])]

    async def coordinates(self) -> Coordinates | None:
        """Geographical coordinates, falling back to the infobox when the API has none."""
        entry = await self._query_page(prop="coordinates")
        coordinates = entry.get("coordinates")
        if coordinates:
            return Coordinates.model_validate(coordinates[0])
        return parse_coordinates(await self._general_info())

    def url(self) -> str | None:
        """Canonical URL of the page."""
        return self.raw.canonicalurl

    # Infobox

    async def raw_info(self, title: str | None = None) -> str | None:
        """Wikitext of section 0 (where infoboxes live) of this page or of ``title``."""
        response = await self.transport.call(
            query_shape(prop="revisions", rvprop="content", rvsection=0, titles=title or self.title)
        )
        return get_path(response, "query", "pages", first_value, "revisions", 0, "*")

    async def tables(self) -> list[list[dict[str, str]]]:
        """Tables found anywhere in the page's wikitext."""
        response = await self.transport.call(query_shape(prop="revisions", rvprop="content", titles=self.title))
        wikitext = get_path(response, "query", "pages", first_value, "revisions", 0, "*")
        return parse_infobox(wikitext).tables

    async def full_info(self) -> InfoboxData:
        """Parsed infobox fields and tables of the page."""
        return parse_infobox(await self.raw_info())

    async def _general_info(self) -> dict[str, FieldValue]:
        """General infobox fields, trying ``Template:Infobox <title>`` once when the page has none."""
        general = parse_infobox(await self.raw_info()).general
        if general:
            return general

        template = f"Template:Infobox {self.title.lower()}"
        self.logger.debug("No infobox fields on page, trying template", template=template)
        return parse_infobox(await self.raw_info(template)).general

    async def info(self, key: str | None = None) -> dict[str, FieldValue] | FieldValue | None:
        """General infobox fields, or the value of one field.

        Kept for compatibility; ``full_info`` is the structured replacement.

        Args:
            key: Field name to return; falsy keys return the whole mapping

        Returns:
            The field mapping, the value for ``key``, or None if ``key`` is absent
        """
        warnings.warn(
            "WikiPage.info() is deprecated, use WikiPage.full_info() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        metadata = await self._general_info()
        if not key:
            return metadata
        return metadata.get(key)
