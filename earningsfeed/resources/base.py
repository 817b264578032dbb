from typing import TYPE_CHECKING, Any, Optional, TypeVar
from urllib.parse import quote

from pydantic import BaseModel

from earningsfeed.http.retry import with_retry
from earningsfeed.pagination import AsyncPaginator
from earningsfeed.schemas.common import Page
from earningsfeed.schemas.params import QueryParams

if TYPE_CHECKING:
    from earningsfeed.client import EarningsFeed

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)
P = TypeVar("P", bound=QueryParams)


class Resource:
    """Shared plumbing for API resources: one-page lists, streams and single-object gets."""

    def __init__(self, client: "EarningsFeed"):
        self._client = client

    @staticmethod
    def _resolve_params(model: type[P], params: Optional[P], filters: dict[str, Any]) -> P:
        if params is not None and filters:
            raise TypeError("pass either a params object or keyword filters, not both")
        if params is None:
            return model(**filters)
        if not isinstance(params, model):
            raise TypeError(f"expected {model.__name__}, got {type(params).__name__}")
        return params

    @staticmethod
    def _segment(value: Any) -> str:
        return quote(str(value), safe="")

    async def _list(self, path: str, params: QueryParams, item_type: type[T]) -> Page[T]:
        fetcher = self._client._fetcher
        query = params.to_query()
        return await with_retry(
            lambda: fetcher.fetch_page(path, query, params.cursor, item_type),
            self._client.retry_policy,
            description=f"GET {path}",
        )

    def _iter(self, path: str, params: QueryParams, item_type: type[T]) -> AsyncPaginator[T]:
        return AsyncPaginator(
            self._client._fetcher,
            path,
            params.to_query(),
            item_type,
            self._client.retry_policy,
            cursor=params.cursor,
        )

    async def _get(self, path: str, model: type[M]) -> M:
        fetcher = self._client._fetcher
        return await with_retry(
            lambda: fetcher.fetch_object(path, model),
            self._client.retry_policy,
            description=f"GET {path}",
        )
