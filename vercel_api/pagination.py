"""Lazy iteration over cursor-paginated list endpoints.

The iterators are explicit state machines rather than generators:

* ``NOT_STARTED``: nothing fetched yet; the next step fetches with no cursor.
* ``IN_PAGE``: items of the buffered page are handed out one by one; once
  they run out, the page's ``next`` cursor is fetched, or the sequence ends
  if there is none.
* ``EXHAUSTED``: terminal; every further step ends the sequence.

An empty page always ends the sequence.  A failed fetch propagates to the
consumer and leaves the state unchanged, so advancing again retries the same
cursor.  Iterators are single-pass; build a new one to start over.
"""

from __future__ import annotations

import enum
from typing import Awaitable, Callable, Generic, TypeVar

from vercel_api.schemas import Page

T = TypeVar("T")

Cursor = int | None
FetchPage = Callable[[Cursor], Page[T]]
AsyncFetchPage = Callable[[Cursor], Awaitable[Page[T]]]


class PagingState(enum.Enum):
    NOT_STARTED = "not_started"
    IN_PAGE = "in_page"
    EXHAUSTED = "exhausted"


class _PageCursor(Generic[T]):
    """State shared by the sync and async iterators."""

    def __init__(self) -> None:
        self.state = PagingState.NOT_STARTED
        self._page: Page[T] | None = None
        self._index = 0

    @property
    def exhausted(self) -> bool:
        return self.state is PagingState.EXHAUSTED

    def _fetch_needed(self) -> bool:
        if self.state is PagingState.NOT_STARTED:
            return True
        if self.state is PagingState.IN_PAGE and self._index >= len(self._page.items):
            if self._page.next_cursor is None:
                self.state = PagingState.EXHAUSTED
                return False
            return True
        return False

    def _cursor(self) -> Cursor:
        if self._page is None:
            return None
        return self._page.next_cursor

    def _accept(self, page: Page[T]) -> None:
        if not page.items:
            self.state = PagingState.EXHAUSTED
            self._page = None
            return
        self.state = PagingState.IN_PAGE
        self._page = page
        self._index = 0

    def _take(self) -> T:
        item = self._page.items[self._index]
        self._index += 1
        return item


class PageIterator(_PageCursor[T]):
    """Blocking iterator over every item of a paginated endpoint."""

    def __init__(self, fetch_page: FetchPage[T]) -> None:
        super().__init__()
        self._fetch_page = fetch_page

    def __iter__(self) -> PageIterator[T]:
        return self

    def __next__(self) -> T:
        if self._fetch_needed():
            self._accept(self._fetch_page(self._cursor()))
        if self.exhausted:
            raise StopIteration
        return self._take()


class AsyncPageIterator(_PageCursor[T]):
    """``async for`` counterpart of :class:`PageIterator`."""

    def __init__(self, fetch_page: AsyncFetchPage[T]) -> None:
        super().__init__()
        self._fetch_page = fetch_page

    def __aiter__(self) -> AsyncPageIterator[T]:
        return self

    async def __anext__(self) -> T:
        if self._fetch_needed():
            self._accept(await self._fetch_page(self._cursor()))
        if self.exhausted:
            raise StopAsyncIteration
        return self._take()
