# ABOUTME: Shared fixtures and fake transports for wiki-facets tests
# ABOUTME: Builds MediaWiki-shaped JSON responses and records every API call a test makes

from collections.abc import Callable, Iterable, Mapping
from typing import Any

import pytest

from wiki_facets.config import reload_config
from wiki_facets.core.models import PageReference
from wiki_facets.page import WikiPage

Response = dict[str, Any] | Exception


class FakeTransport:
    """Transport double: answers from a script (in order) or a handler, and records params."""

    def __init__(
        self,
        responses: Iterable[Response] | None = None,
        handler: Callable[[dict[str, Any]], Response] | None = None,
    ):
        self.responses = list(responses or [])
        self.handler = handler
        self.calls: list[dict[str, Any]] = []

    async def call(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self.calls.append(dict(params))
        if self.handler is not None:
            response = self.handler(dict(params))
        elif self.responses:
            response = self.responses.pop(0)
        else:
            raise AssertionError(f"Unexpected API call: {dict(params)}")

        if isinstance(response, Exception):
            raise response
        return response


def page_response(title: str = "Batman", pageid: int = 4335, **fields: Any) -> dict[str, Any]:
    """``query.pages`` response for a single page carrying ``fields``."""
    return {"query": {"pages": {str(pageid): {"pageid": pageid, "ns": 0, "title": title, **fields}}}}


def wikitext_response(title: str, wikitext: str | None, pageid: int = 4335) -> dict[str, Any]:
    """Revision content response; ``None`` wikitext yields a missing page."""
    if wikitext is None:
        return {"query": {"pages": {"-1": {"ns": 10, "title": title, "missing": ""}}}}
    return page_response(title, pageid, revisions=[{"contentformat": "text/x-wiki", "*": wikitext}])


def images_response(*titles: str, with_info: bool = True) -> dict[str, Any]:
    """``generator=images`` response listing ``titles`` in order."""
    pages = {}
    for index, title in enumerate(titles, start=1):
        entry: dict[str, Any] = {"pageid": 1000 + index, "ns": 6, "title": title, "imagerepository": "local"}
        if with_info:
            name = title.split(":", 1)[-1].replace(" ", "_")
            entry["imageinfo"] = [{"url": f"https://upload.test/{name}", "descriptionurl": f"https://wiki.test/{title}"}]
        pages[str(-index)] = entry
    return {"query": {"pages": pages}}


def image_url(title: str) -> str:
    return f"https://upload.test/{title.split(':', 1)[-1].replace(' ', '_')}"


@pytest.fixture
def make_page():
    """Build a WikiPage over a FakeTransport."""

    def _make(transport: FakeTransport, title: str = "Batman", pageid: int | None = 4335) -> WikiPage:
        reference = PageReference(
            pageid=pageid, title=title, canonicalurl=f"https://en.wikipedia.org/wiki/{title.replace(' ', '_')}"
        )
        return WikiPage(reference, transport)

    return _make


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate tests from WIKI_FACETS_* variables in the developer's environment."""
    import os

    for name in list(os.environ):
        if name.startswith("WIKI_FACETS_"):
            monkeypatch.delenv(name, raising=False)
    reload_config()
    yield
    monkeypatch.undo()
    reload_config()
