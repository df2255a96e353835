"""
Tests for cursor pagination helpers.
"""

from typing import List, Optional

import pytest
from pydantic import BaseModel

from src.beeper_desktop.core.pagination import (
    Cursor,
    PaginationInfo,
    acollect_all,
    aiter_pages,
    collect_all,
    iter_items,
    iter_pages,
    with_cursor,
)


class Params(BaseModel):
    query: Optional[str] = None
    cursor: Optional[str] = None


class FakeServer:
    """Serves pages keyed by cursor and records the params it was called with."""

    def __init__(self, pages):
        self.pages = pages
        self.calls: List[Params] = []

    def fetch(self, params):
        self.calls.append(params)
        cursor = params.cursor if isinstance(params, BaseModel) else params.get("cursor")
        return Cursor[int].model_validate(self.pages[cursor])

    async def afetch(self, params):
        return self.fetch(params)


THREE_PAGES = {
    None: {"items": [1, 2], "pagination": {"cursor": "c1", "hasMore": True}},
    "c1": {"items": [3], "pagination": {"cursor": "c2", "hasMore": True}},
    "c2": {"items": [4], "pagination": {"cursor": "c3", "hasMore": False}},
}


class TestCursor:

    def test_next_cursor(self):
        page = Cursor[int].model_validate({"items": [1], "pagination": {"cursor": "abc", "hasMore": True}})
        assert page.next_cursor == "abc"
        assert page.has_next_page() is True

    def test_no_pagination(self):
        page = Cursor[int].model_validate({"items": [1]})
        assert page.pagination is None
        assert page.next_cursor is None

    def test_has_more_false(self):
        page = Cursor[int].model_validate({"items": [], "pagination": {"cursor": "abc", "hasMore": False}})
        assert page.has_next_page() is False

    def test_has_more_without_cursor(self):
        page = Cursor[int].model_validate({"items": [], "pagination": {"hasMore": True}})
        assert page.next_cursor is None

    def test_snake_case_has_more(self):
        info = PaginationInfo.model_validate({"cursor": "x", "has_more": True})
        assert info.has_more is True

    def test_serializes_camel_case(self):
        info = PaginationInfo(cursor="x", has_more=True)
        assert info.model_dump(by_alias=True)["hasMore"] is True


class TestWithCursor:

    def test_model_not_mutated(self):
        params = Params(query="team")
        updated = with_cursor(params, "c1")
        assert updated.cursor == "c1"
        assert updated.query == "team"
        assert params.cursor is None

    def test_mapping_not_mutated(self):
        params = {"query": "team"}
        updated = with_cursor(params, "c1")
        assert updated == {"query": "team", "cursor": "c1"}
        assert "cursor" not in params


class TestIteration:

    def test_three_pages(self):
        server = FakeServer(THREE_PAGES)
        pages = list(iter_pages(server.fetch, Params(query="q")))

        assert [p.items for p in pages] == [[1, 2], [3], [4]]
        assert [c.cursor for c in server.calls] == [None, "c1", "c2"]
        assert all(c.query == "q" for c in server.calls)

    def test_items_in_order(self):
        server = FakeServer(THREE_PAGES)
        assert list(iter_items(server.fetch, Params())) == [1, 2, 3, 4]
        assert collect_all(FakeServer(THREE_PAGES).fetch, Params()) == [1, 2, 3, 4]

    def test_single_page_without_pagination(self):
        server = FakeServer({None: {"items": [7]}})
        assert collect_all(server.fetch, Params()) == [7]
        assert len(server.calls) == 1

    def test_stops_on_missing_cursor(self):
        server = FakeServer({None: {"items": [1], "pagination": {"hasMore": True}}})
        assert collect_all(server.fetch, Params()) == [1]
        assert len(server.calls) == 1

    def test_lazy(self):
        server = FakeServer(THREE_PAGES)
        pages = iter_pages(server.fetch, Params())
        next(pages)
        assert len(server.calls) == 1

    def test_error_propagates(self):
        def fetch(params):
            if params.cursor == "c1":
                raise RuntimeError("boom")
            return Cursor[int].model_validate(THREE_PAGES[None])

        with pytest.raises(RuntimeError):
            collect_all(fetch, Params())

    def test_mapping_params(self):
        server = FakeServer(THREE_PAGES)
        assert collect_all(server.fetch, {"query": "q"}) == [1, 2, 3, 4]


class TestAsyncIteration:

    @pytest.mark.asyncio
    async def test_three_pages(self):
        server = FakeServer(THREE_PAGES)
        pages = [page async for page in aiter_pages(server.afetch, Params())]
        assert [p.items for p in pages] == [[1, 2], [3], [4]]

    @pytest.mark.asyncio
    async def test_collect_all(self):
        assert await acollect_all(FakeServer(THREE_PAGES).afetch, Params()) == [1, 2, 3, 4]
