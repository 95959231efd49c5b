# ABOUTME: Cursor-based pagination engine for paged MediaWiki list endpoints
# ABOUTME: Drains continuation-token sequences lazily (Cursor) or eagerly (aggregate), endpoint-agnostic

from collections.abc import AsyncIterator, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, Protocol, TypeVar

from wiki_facets.errors import ContinuationLoopError
from wiki_facets.utils.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class Transport(Protocol):
    """Anything that performs one API round trip for a flat parameter mapping."""

    async def call(self, params: Mapping[str, Any]) -> dict[str, Any]: ...


@dataclass(frozen=True)
class Batch(Generic[T]):
    """One page of results plus the continuation parameters for the next page, if any."""

    items: list[T] = field(default_factory=list)
    continuation: Mapping[str, Any] | None = None


Extractor = Callable[[dict[str, Any]], Batch[T]]


def query_shape(params: Mapping[str, Any] | None = None, **extra: Any) -> Mapping[str, Any]:
    """Freeze request parameters into a read-only mapping."""
    return MappingProxyType({**(params or {}), **extra})


def mediawiki_continuation(response: Mapping[str, Any]) -> dict[str, Any] | None:
    """Return the ``continue`` block of a MediaWiki response, or None on the last page.

    Every key is kept, including the ``continue`` marker itself, because the API
    expects the whole block to be echoed back on the next request.
    """
    block = response.get("continue")
    return dict(block) if block else None


def _token_key(token: Mapping[str, Any]) -> tuple[tuple[str, str], ...]:
    return tuple(sorted((str(k), str(v)) for k, v in token.items()))


class Cursor(Generic[T]):
    """Stateful handle over one in-progress pagination sequence.

    ``results`` holds the most recently fetched batch. ``fetch_next`` advances the
    sequence; once the remote stops sending a continuation token ``has_more`` is
    False and further calls return an empty batch without touching the network.

    A cursor handed out by :func:`paginate` carries its first batch in ``results``
    unread; the first drain (``aggregate`` or ``async for``) emits it, and any
    later ``fetch_next`` marks it as already seen.
    """

    def __init__(
        self,
        transport: Transport,
        query: Mapping[str, Any],
        extract: Extractor[T],
        *,
        limit: int | str | None = None,
        limit_param: str | None = None,
    ):
        self.transport = transport
        self.query = query_shape(query)
        self.extract = extract
        self.limit = limit
        self.limit_param = limit_param

        self.continuation: dict[str, Any] | None = None
        self.has_more = True
        self.results: list[T] = []
        self.batches_fetched = 0
        self._issued: set[tuple[tuple[str, str], ...]] = set()
        self._prefetched = False

    def next_params(self) -> dict[str, Any]:
        """Parameters for the next request: base query, batch limit, then continuation."""
        params = dict(self.query)
        if self.limit is not None and self.limit_param:
            params[self.limit_param] = self.limit
        if self.continuation:
            params.update(self.continuation)
        return params

    async def fetch_next(self) -> list[T]:
        """Fetch, store, and return the next batch.

        Transport and extraction errors propagate and leave the cursor untouched,
        so the same call can simply be retried.

        Raises:
            ContinuationLoopError: if the remote repeats a continuation token
        """
        if not self.has_more:
            return []

        response = await self.transport.call(self.next_params())
        batch = self.extract(response)

        continuation = dict(batch.continuation) if batch.continuation else None
        if continuation is not None:
            key = _token_key(continuation)
            if key in self._issued:
                raise ContinuationLoopError(f"Continuation token repeated by remote: {continuation}")
            self._issued.add(key)

        self.continuation = continuation
        self.has_more = continuation is not None
        self.results = list(batch.items)
        self.batches_fetched += 1
        self._prefetched = False

        logger.debug(
            "Fetched batch",
            batch_number=self.batches_fetched,
            batch_size=len(self.results),
            has_more=self.has_more,
        )
        return self.results

    async def aggregate(self) -> list[T]:
        """Drain the cursor; see :func:`aggregate`."""
        return await aggregate(self)

    def take_prefetched(self) -> list[T]:
        """Hand out the unread first batch once; later calls return an empty list."""
        if not self._prefetched:
            return []
        self._prefetched = False
        return list(self.results)

    async def __aiter__(self) -> AsyncIterator[T]:
        for item in self.take_prefetched():
            yield item
        while self.has_more:
            for item in await self.fetch_next():
                yield item

    def __repr__(self) -> str:
        return (
            f"Cursor(query={dict(self.query)!r}, batches_fetched={self.batches_fetched}, "
            f"has_more={self.has_more})"
        )


async def aggregate(cursor: Cursor[T]) -> list[T]:
    """Fetch every remaining batch and return all items in server order.

    An unread first batch left by :func:`paginate` comes first, so such a cursor
    aggregates to the same list as ``aggregated=True``. Batches the caller already
    received from ``fetch_next`` are not repeated, and a drained cursor gives ``[]``.
    Round trips are sequential since each depends on the previous token. A failure
    part-way through propagates and the partial list is discarded.
    """
    collected: list[T] = cursor.take_prefetched()
    while cursor.has_more:
        collected.extend(await cursor.fetch_next())
    return collected


async def paginate(
    transport: Transport,
    query: Mapping[str, Any],
    extract: Extractor[T],
    *,
    limit: int | str | None = None,
    limit_param: str | None = None,
    aggregated: bool = True,
) -> list[T] | Cursor[T]:
    """Entry point for every paginated facet.

    Args:
        transport: Object issuing the API round trips
        query: Base request parameters (not mutated)
        extract: Maps a raw response to a Batch of items plus continuation
        limit: Items requested per batch
        limit_param: Name of the endpoint's limit parameter (``pllimit``, ``bllimit`` ...)
        aggregated: Drain everything (True) or return a cursor holding the first batch (False)

    Returns:
        The full ordered list when aggregated, otherwise a Cursor
    """
    cursor: Cursor[T] = Cursor(transport, query, extract, limit=limit, limit_param=limit_param)
    if aggregated:
        return await aggregate(cursor)
    await cursor.fetch_next()
    cursor._prefetched = True
    return cursor
