"""
Page fetching and auto-pagination.

``PageFetcher`` performs one classified request and decodes a page envelope.
``AsyncPaginator`` drives it lazily, one page at a time, and hands out
individual items across page boundaries. Pages are fetched strictly in
sequence because each cursor is only valid against the page that produced it.
"""
import asyncio
import logging
from collections import deque
from enum import Enum
from typing import Any, Generic, Mapping, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from earningsfeed.core.errors import DecodeError
from earningsfeed.http.classifier import classify
from earningsfeed.http.retry import RetryPolicy, with_retry
from earningsfeed.http.transport import Request, Transport
from earningsfeed.schemas.common import Page
from earningsfeed.schemas.params import CURSOR_PARAM

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class PageFetcher:
    """Performs single classified GET requests and decodes their payloads."""

    def __init__(self, transport: Transport, api_key: str):
        self.transport = transport
        self._api_key = api_key

    async def get_json(self, path: str, params: Optional[Mapping[str, str]] = None) -> Any:
        """One request, classified. Returns the decoded JSON payload."""
        request = Request(method="GET", path=path, api_key=self._api_key, params=dict(params or {}))
        raw = await self.transport.send(request)
        return classify(raw.status_code, raw.headers, raw.body, path=path)

    async def fetch_page(
        self,
        path: str,
        params: Mapping[str, str],
        cursor: Optional[str],
        item_type: type[T],
    ) -> Page[T]:
        """
        Fetch one page of a list endpoint.

        Any ``cursor`` in ``params`` is replaced by the ``cursor`` argument,
        which is sent only when not None.

        Raises:
            APIError: As classified from the response
            NetworkError: If the request did not complete
            DecodeError: If the payload is not a valid page of ``item_type``
        """
        query = {key: value for key, value in params.items() if key != CURSOR_PARAM}
        if cursor is not None:
            query[CURSOR_PARAM] = cursor

        payload = await self.get_json(path, query)
        try:
            return Page[item_type].model_validate(payload)
        except PydanticValidationError as e:
            raise DecodeError(e, details={"path": path}) from e

    async def fetch_object(self, path: str, model: type[M]) -> M:
        """Fetch a single-object endpoint and decode it into ``model``."""
        payload = await self.get_json(path)
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            raise DecodeError(e, details={"path": path}) from e


class StreamState(str, Enum):
    FETCHING = "fetching"
    YIELDING = "yielding"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class AsyncPaginator(Generic[T]):
    """
    Lazy async iterator over every item of a paginated endpoint.

    A page is requested only when the items of the previous page have been
    consumed. If a page request fails (after retries), the error is raised
    from ``__anext__`` and the stream ends; items already produced stay valid.
    The stream is single-pass: iterate it once, or call the resource's
    ``iter`` again for a fresh stream.

    Example:
        async for filing in client.filings.iter(ticker="AAPL"):
            print(filing.form_type, filing.title)
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        path: str,
        params: Mapping[str, str],
        item_type: type[T],
        retry_policy: RetryPolicy,
        *,
        cursor: Optional[str] = None,
    ):
        self._fetcher = fetcher
        self._path = path
        self._params = dict(params)
        self._item_type = item_type
        self._retry_policy = retry_policy

        self.state = StreamState.FETCHING
        self.cursor = cursor
        self._next_cursor: Optional[str] = None
        self._buffer: deque[T] = deque()
        self.items_yielded = 0
        self.pages_fetched = 0
        self.error: Optional[Exception] = None
        # Serializes overlapping __anext__ calls so pages are fetched one at a time, in order
        self._lock = asyncio.Lock()

    def __aiter__(self) -> "AsyncPaginator[T]":
        return self

    async def __anext__(self) -> T:
        async with self._lock:
            while True:
                if self.state is StreamState.YIELDING:
                    if self._buffer:
                        self.items_yielded += 1
                        return self._buffer.popleft()
                    if self._next_cursor is None:
                        self._finish()
                    else:
                        self.cursor = self._next_cursor
                        self._next_cursor = None
                        self.state = StreamState.FETCHING
                elif self.state is StreamState.FETCHING:
                    await self._fetch_next_page()
                else:
                    raise StopAsyncIteration

    async def _fetch_next_page(self) -> None:
        cursor = self.cursor
        try:
            page = await with_retry(
                lambda: self._fetcher.fetch_page(self._path, self._params, cursor, self._item_type),
                self._retry_policy,
                description=f"GET {self._path}",
            )
        except asyncio.CancelledError:
            self.state = StreamState.EXHAUSTED
            raise
        except Exception as e:
            self.state = StreamState.FAILED
            self.error = e
            logger.debug(
                f"Stream {self._path} failed on page {self.pages_fetched + 1} "
                f"after {self.items_yielded} items: {e}"
            )
            raise

        self.pages_fetched += 1
        next_cursor = page.cursor_for_next_page
        if page.has_more and next_cursor is None:
            logger.warning(f"{self._path}: server reported more results but no cursor, stopping")
        elif next_cursor is not None and next_cursor == cursor:
            logger.warning(f"{self._path}: server returned the same cursor {cursor!r} again, stopping")
            next_cursor = None

        if not page.items and next_cursor is None:
            self._finish()
            return

        self._buffer.extend(page.items)
        self._next_cursor = next_cursor
        self.state = StreamState.YIELDING

    def _finish(self) -> None:
        self.state = StreamState.EXHAUSTED
        logger.debug(
            f"Stream {self._path} exhausted: {self.items_yielded} items from {self.pages_fetched} pages"
        )

    async def aclose(self) -> None:
        """Stop the stream; no further requests are made and no items produced."""
        if self.state in (StreamState.FETCHING, StreamState.YIELDING):
            self._buffer.clear()
            self._next_cursor = None
            self.state = StreamState.EXHAUSTED

    async def __aenter__(self) -> "AsyncPaginator[T]":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"AsyncPaginator(path={self._path!r}, state={self.state.value}, "
            f"items_yielded={self.items_yielded}, pages_fetched={self.pages_fetched})"
        )
