from typing import Any, Optional

from earningsfeed.pagination import AsyncPaginator
from earningsfeed.resources.base import Resource
from earningsfeed.schemas.common import Page
from earningsfeed.schemas.institutional import InstitutionalHolding
from earningsfeed.schemas.params import ListInstitutionalParams

INSTITUTIONAL_HOLDINGS_PATH = "/api/v1/institutional/holdings"


class InstitutionalResource(Resource):
    """13F institutional holdings."""

    async def list(
        self, params: Optional[ListInstitutionalParams] = None, **filters: Any
    ) -> Page[InstitutionalHolding]:
        """Fetch one page of holdings (e.g., ``manager_cik=1067983, min_value=1_000_000``)."""
        params = self._resolve_params(ListInstitutionalParams, params, filters)
        return await self._list(INSTITUTIONAL_HOLDINGS_PATH, params, InstitutionalHolding)

    def iter(
        self, params: Optional[ListInstitutionalParams] = None, **filters: Any
    ) -> AsyncPaginator[InstitutionalHolding]:
        params = self._resolve_params(ListInstitutionalParams, params, filters)
        return self._iter(INSTITUTIONAL_HOLDINGS_PATH, params, InstitutionalHolding)
