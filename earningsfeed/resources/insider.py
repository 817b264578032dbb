from typing import Any, Optional

from earningsfeed.pagination import AsyncPaginator
from earningsfeed.resources.base import Resource
from earningsfeed.schemas.common import Page
from earningsfeed.schemas.insider import InsiderTransaction
from earningsfeed.schemas.params import ListInsiderParams

INSIDER_TRANSACTIONS_PATH = "/api/v1/insider/transactions"


class InsiderResource(Resource):
    """Form 3/4/5 insider transactions."""

    async def list(
        self, params: Optional[ListInsiderParams] = None, **filters: Any
    ) -> Page[InsiderTransaction]:
        """Fetch one page of insider transactions (e.g., ``ticker="AAPL", direction="sell"``)."""
        params = self._resolve_params(ListInsiderParams, params, filters)
        return await self._list(INSIDER_TRANSACTIONS_PATH, params, InsiderTransaction)

    def iter(
        self, params: Optional[ListInsiderParams] = None, **filters: Any
    ) -> AsyncPaginator[InsiderTransaction]:
        params = self._resolve_params(ListInsiderParams, params, filters)
        return self._iter(INSIDER_TRANSACTIONS_PATH, params, InsiderTransaction)
