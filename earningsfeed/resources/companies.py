from typing import Any, Optional

from earningsfeed.pagination import AsyncPaginator
from earningsfeed.resources.base import Resource
from earningsfeed.schemas.common import Page
from earningsfeed.schemas.companies import Company, CompanySearchResult
from earningsfeed.schemas.params import SearchCompaniesParams

COMPANIES_PATH = "/api/v1/companies"
COMPANY_SEARCH_PATH = f"{COMPANIES_PATH}/search"


class CompaniesResource(Resource):
    """Company profiles and search."""

    async def get(self, cik: int) -> Company:
        """
        Get a company profile by CIK.

        Raises:
            NotFoundError: If no company has that CIK
        """
        return await self._get(f"{COMPANIES_PATH}/{self._segment(cik)}", Company)

    async def search(
        self, params: Optional[SearchCompaniesParams] = None, **filters: Any
    ) -> Page[CompanySearchResult]:
        """Fetch one page of search results (e.g., ``q="apple"`` or ``sic_code=3571``)."""
        params = self._resolve_params(SearchCompaniesParams, params, filters)
        return await self._list(COMPANY_SEARCH_PATH, params, CompanySearchResult)

    def iter_search(
        self, params: Optional[SearchCompaniesParams] = None, **filters: Any
    ) -> AsyncPaginator[CompanySearchResult]:
        params = self._resolve_params(SearchCompaniesParams, params, filters)
        return self._iter(COMPANY_SEARCH_PATH, params, CompanySearchResult)
