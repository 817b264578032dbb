from typing import Any, Optional

from earningsfeed.pagination import AsyncPaginator
from earningsfeed.resources.base import Resource
from earningsfeed.schemas.common import Page
from earningsfeed.schemas.filings import Filing, FilingDetail
from earningsfeed.schemas.params import ListFilingsParams

FILINGS_PATH = "/api/v1/filings"


class FilingsResource(Resource):
    """SEC filings (10-K, 10-Q, 8-K and the rest)."""

    async def list(self, params: Optional[ListFilingsParams] = None, **filters: Any) -> Page[Filing]:
        """
        Fetch one page of filings.

        Args:
            params: Filter set; alternatively pass filters as keywords
                (e.g., ``ticker="AAPL", forms=["10-K", "10-Q"], limit=25``)

        Returns:
            Page with the filings, ``has_more`` and ``next_cursor``
        """
        params = self._resolve_params(ListFilingsParams, params, filters)
        return await self._list(FILINGS_PATH, params, Filing)

    def iter(self, params: Optional[ListFilingsParams] = None, **filters: Any) -> AsyncPaginator[Filing]:
        """Stream every filing matching the filters, following cursors automatically."""
        params = self._resolve_params(ListFilingsParams, params, filters)
        return self._iter(FILINGS_PATH, params, Filing)

    async def get(self, accession_number: str) -> FilingDetail:
        """
        Get a filing by accession number, with its documents and roles.

        Args:
            accession_number: SEC accession number (e.g., "0000320193-24-000123")

        Raises:
            NotFoundError: If no filing has that accession number
        """
        path = f"{FILINGS_PATH}/{self._segment(accession_number)}"
        return await self._get(path, FilingDetail)
