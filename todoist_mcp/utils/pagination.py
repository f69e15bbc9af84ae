"""Sequential cursor pagination over Todoist list endpoints."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from todoist_mcp.models.output import PageRequest, PageResult

logger = logging.getLogger(__name__)

PageFetcher = Callable[[str | None], Awaitable[PageResult]]


async def collect_pages(
    fetch: PageFetcher,
    limit: int,
    cursor: str | None = None,
    max_limit: int = 200,
) -> PageResult:
    """
    Accumulate items from consecutive pages until `limit` is reached or the source ends.

    Pages are fetched strictly in order because each cursor depends on the
    previous response. Items beyond `limit` are dropped, and the cursor of the
    last fetched page is returned unchanged so callers can resume from it.
    Errors from `fetch` propagate; nothing partial is returned.

    Args:
        fetch: Called with the cursor of the page to load (None for the first page)
        limit: Number of items wanted; clamped into [1, max_limit]
        cursor: Cursor to resume from
        max_limit: Tool-specific maximum for `limit`
    """
    request = PageRequest(cursor=cursor, limit=limit, max_limit=max_limit)
    items: list[Any] = []
    next_cursor = request.cursor
    pages = 0

    while True:
        page = await fetch(next_cursor)
        pages += 1
        items.extend(page.items)
        next_cursor = page.next_cursor
        if len(items) >= request.limit or not next_cursor:
            break

    logger.debug(f"Fetched {pages} page(s), {len(items)} item(s), more available: {bool(next_cursor)}")
    return PageResult(items=items[: request.limit], next_cursor=next_cursor)


async def collect_all(fetch: PageFetcher) -> list[Any]:
    """Walk every page of a source and return all of its items."""
    items: list[Any] = []
    cursor: str | None = None
    while True:
        page = await fetch(cursor)
        items.extend(page.items)
        cursor = page.next_cursor
        if not cursor:
            return items
