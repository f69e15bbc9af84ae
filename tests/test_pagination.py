"""Tests for cursor pagination."""

import pytest

from todoist_mcp.errors import RemoteApiError
from todoist_mcp.models.output import PageRequest, PageResult
from todoist_mcp.utils.pagination import collect_all, collect_pages


def make_source(page_sizes: list[int]):
    """Build a fetcher serving pages of the given sizes; records the cursors it saw."""
    pages = []
    start = 0
    for index, size in enumerate(page_sizes):
        next_cursor = f"c{index + 1}" if index + 1 < len(page_sizes) else None
        pages.append(PageResult(items=list(range(start, start + size)), next_cursor=next_cursor))
        start += size

    seen: list[str | None] = []

    async def fetch(cursor: str | None) -> PageResult:
        seen.append(cursor)
        index = 0 if cursor is None else int(cursor[1:])
        return pages[index]

    return fetch, seen


class TestCollectPages:
    """Tests for the page walker."""

    @pytest.mark.asyncio
    async def test_stops_once_limit_reached(self):
        fetch, seen = make_source([20, 20, 20, 5])
        result = await collect_pages(fetch, limit=45)
        assert len(result.items) == 45
        assert result.items == list(range(45))
        assert result.next_cursor == "c3"
        assert seen == [None, "c1", "c2"]

    @pytest.mark.asyncio
    async def test_exhausted_source(self):
        fetch, seen = make_source([20, 5])
        result = await collect_pages(fetch, limit=100)
        assert len(result.items) == 25
        assert result.next_cursor is None
        assert seen == [None, "c1"]

    @pytest.mark.asyncio
    async def test_resumes_from_cursor(self):
        fetch, seen = make_source([10, 10, 10])
        result = await collect_pages(fetch, limit=10, cursor="c1")
        assert result.items == list(range(10, 20))
        assert seen == ["c1"]
        assert result.next_cursor == "c2"

    @pytest.mark.asyncio
    async def test_limit_clamped_to_max(self):
        fetch, _ = make_source([50, 50, 50])
        result = await collect_pages(fetch, limit=500, max_limit=100)
        assert len(result.items) == 100

    @pytest.mark.asyncio
    async def test_errors_propagate(self):
        async def fetch(cursor):
            raise RemoteApiError(500, "boom")

        with pytest.raises(RemoteApiError):
            await collect_pages(fetch, limit=10)

    @pytest.mark.asyncio
    async def test_collect_all(self):
        fetch, seen = make_source([3, 3, 1])
        assert await collect_all(fetch) == list(range(7))
        assert seen == [None, "c1", "c2"]


class TestPageRequest:
    def test_limit_clamped(self):
        assert PageRequest(limit=0, max_limit=100).limit == 1
        assert PageRequest(limit=1000, max_limit=100).limit == 100
        assert PageRequest(limit=30, max_limit=100).limit == 30
