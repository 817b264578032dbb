"""
HTTP transport for the EarningsFeed API.

Issues exactly one request per ``send`` call. No retries and no status
interpretation happen here; httpx failures are mapped to ``NetworkError`` so
httpx types never leave this module.
"""
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

import httpx

from earningsfeed import __version__
from earningsfeed.core.errors import NetworkError, RequestTimeoutError

logger = logging.getLogger(__name__)

USER_AGENT = f"earningsfeed-python/{__version__}"


@dataclass(frozen=True)
class Request:
    """A single API request, built once per call."""
    method: str
    path: str
    api_key: str
    params: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RawResponse:
    """Status, headers and body of an HTTP response, before classification."""
    status_code: int
    headers: Mapping[str, str]
    body: bytes
    path: str


class Transport:
    """Thin wrapper around a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(timeout=timeout)

    async def send(self, request: Request) -> RawResponse:
        """
        Send one request and return the raw response.

        Args:
            request: Request to send; ``path`` is relative to the base URL.

        Returns:
            RawResponse with status, headers and body

        Raises:
            ValueError: If the path is empty or a query value is not a string
            RequestTimeoutError: If the request exceeded the timeout
            NetworkError: On DNS, connection or protocol failures
        """
        if not request.path:
            raise ValueError("request path must not be empty")
        for key, value in request.params.items():
            if not isinstance(value, str):
                raise ValueError(f"query parameter {key!r} must be a string, got {type(value).__name__}")

        url = f"{self.base_url}{request.path}"
        headers = {
            "Authorization": f"Bearer {request.api_key}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

        logger.debug(f"{request.method} {request.path} params={dict(request.params)}")
        try:
            response = await self._client.request(
                request.method,
                url,
                params=dict(request.params),
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(self.timeout, e, details={"path": request.path}) from e
        except httpx.RequestError as e:
            raise NetworkError(e, details={"path": request.path}) from e

        logger.debug(f"{request.method} {request.path} -> {response.status_code}")
        return RawResponse(
            status_code=response.status_code,
            headers=response.headers,
            body=response.content,
            path=request.path,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()
