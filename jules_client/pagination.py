"""Lazy iteration over cursor-paginated listings.

A :class:`PageStream` fetches a page only when the consumer asks for an item
and nothing is buffered, so at most one page is held in memory. Items are
yielded in server order across pages. Stopping early leaves no pending work.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Generic, TypeVar

from .models import Page

logger = logging.getLogger("jules_client.pagination")

T = TypeVar("T")

FetchPage = Callable[[str | None], Awaitable[Page[T]]]


class StreamState(str, Enum):
    START = "start"
    FETCHING = "fetching"
    YIELDING = "yielding"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class PageStream(Generic[T]):
    def __init__(self, fetch_page: FetchPage[T]) -> None:
        self._fetch_page = fetch_page
        self._buffer: deque[T] = deque()
        self._next_token: str | None = None
        self._terminal = False
        self._state = StreamState.START
        self._pages_fetched = 0

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    def __aiter__(self) -> PageStream[T]:
        return self

    async def __anext__(self) -> T:
        while True:
            if self._state in (StreamState.EXHAUSTED, StreamState.FAILED):
                raise StopAsyncIteration
            if self._buffer:
                self._state = StreamState.YIELDING
                return self._buffer.popleft()
            if self._terminal:
                self._state = StreamState.EXHAUSTED
                raise StopAsyncIteration
            await self._fetch()

    async def _fetch(self) -> None:
        self._state = StreamState.FETCHING
        try:
            page = await self._fetch_page(self._next_token)
        except Exception:
            self._state = StreamState.FAILED
            self._buffer.clear()
            raise
        self._pages_fetched += 1
        # An absent or empty token marks the last page regardless of item count.
        self._terminal = not page.has_next_page
        self._next_token = None if self._terminal else page.next_page_token
        self._buffer.extend(page.items)
        logger.debug(
            "jules_page_fetched",
            extra={"page": self._pages_fetched, "items": len(page.items), "has_more": not self._terminal},
        )

    async def aclose(self) -> None:
        """Stop the stream, dropping any buffered items without fetching."""
        self._buffer.clear()
        self._terminal = True
        if self._state is not StreamState.FAILED:
            self._state = StreamState.EXHAUSTED

    async def collect(self, limit: int | None = None) -> list[T]:
        """Drain the stream into a list, stopping after ``limit`` items if given."""
        items: list[T] = []
        if limit is not None and limit <= 0:
            return items
        async for item in self:
            items.append(item)
            if limit is not None and len(items) >= limit:
                break
        return items


__all__ = ["FetchPage", "PageStream", "StreamState"]
