"""
Cursor pagination for list/search endpoints.

A page is a ``Cursor[T]``: the items plus optional pagination metadata.
The next page is requested by copying the caller's parameters with
``cursor`` set to the value the server returned; the caller's record is
never mutated. The loop stops when the server omits ``pagination``, says
``hasMore: false``, or says ``hasMore: true`` without a cursor.
"""

from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Generic,
    Iterator,
    List,
    Mapping,
    Optional,
    TypeVar,
    Union,
)

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

T = TypeVar("T")
P = TypeVar("P", bound=Union[BaseModel, Mapping[str, Any]])


class PaginationInfo(BaseModel):
    """Pagination metadata returned next to the items of a page."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cursor: Optional[str] = None
    limit: Optional[int] = None
    direction: Optional[str] = None
    # hasMore in current builds of the desktop app, has_more in older ones
    has_more: bool = Field(
        default=False,
        validation_alias=AliasChoices("hasMore", "has_more"),
        serialization_alias="hasMore",
    )


class Cursor(BaseModel, Generic[T]):
    """One page of results."""

    model_config = ConfigDict(frozen=True)

    items: List[T]
    pagination: Optional[PaginationInfo] = None

    @property
    def next_cursor(self) -> Optional[str]:
        """Cursor for the next page, or None when this page is the last."""
        if self.pagination is None or not self.pagination.has_more:
            return None
        return self.pagination.cursor or None

    def has_next_page(self) -> bool:
        return self.next_cursor is not None


def with_cursor(params: P, cursor: str) -> P:
    """Return a copy of ``params`` with ``cursor`` set."""
    if isinstance(params, BaseModel):
        return params.model_copy(update={"cursor": cursor})
    updated = dict(params)
    updated["cursor"] = cursor
    return updated  # type: ignore[return-value]


def iter_pages(fetch: Callable[[P], Cursor[T]], params: P) -> Iterator[Cursor[T]]:
    """
    Yield pages until the server reports there are no more.

    Args:
        fetch: Function that requests one page for the given params
        params: Parameters of the first request

    Example:
        >>> for page in iter_pages(client.chats.search, ChatSearchParams(limit=50)):
        ...     print(len(page.items))
    """
    while True:
        page = fetch(params)
        yield page

        next_cursor = page.next_cursor
        if next_cursor is None:
            return
        params = with_cursor(params, next_cursor)


def iter_items(fetch: Callable[[P], Cursor[T]], params: P) -> Iterator[T]:
    """Yield items of every page, in page order."""
    for page in iter_pages(fetch, params):
        yield from page.items


def collect_all(fetch: Callable[[P], Cursor[T]], params: P) -> List[T]:
    """Fetch every page and concatenate the items. No deduplication."""
    return list(iter_items(fetch, params))


async def aiter_pages(fetch: Callable[[P], Awaitable[Cursor[T]]], params: P) -> AsyncIterator[Cursor[T]]:
    """Async version of :func:`iter_pages`."""
    while True:
        page = await fetch(params)
        yield page

        next_cursor = page.next_cursor
        if next_cursor is None:
            return
        params = with_cursor(params, next_cursor)


async def aiter_items(fetch: Callable[[P], Awaitable[Cursor[T]]], params: P) -> AsyncIterator[T]:
    """Async version of :func:`iter_items`."""
    async for page in aiter_pages(fetch, params):
        for item in page.items:
            yield item


async def acollect_all(fetch: Callable[[P], Awaitable[Cursor[T]]], params: P) -> List[T]:
    """Async version of :func:`collect_all`."""
    return [item async for item in aiter_items(fetch, params)]
