import logging
from typing import Optional

import httpx

from earningsfeed.core.config import ClientConfig
from earningsfeed.core.errors import ConfigurationError
from earningsfeed.http.retry import RetryPolicy
from earningsfeed.http.transport import Transport
from earningsfeed.pagination import PageFetcher
from earningsfeed.resources import (
    CompaniesResource,
    FilingsResource,
    InsiderResource,
    InstitutionalResource,
)

logger = logging.getLogger(__name__)


class EarningsFeed:
    """
    Async client for the EarningsFeed API.

    Example:
        async with EarningsFeed("your_api_key") as client:
            page = await client.filings.list(ticker="AAPL", limit=10)
            async for trade in client.insider.iter(ticker="AAPL", direction="buy"):
                print(trade.person_name, trade.shares)
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_policy: Optional[RetryPolicy] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        # Explicit values win; anything omitted falls back to settings (env vars / .env)
        config = ClientConfig.build(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
        )
        self._setup(config, retry_policy, http_client)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "EarningsFeed":
        """Create a client from an already validated config."""
        client = cls.__new__(cls)
        client._setup(config, retry_policy, http_client)
        return client

    def _setup(
        self,
        config: ClientConfig,
        retry_policy: Optional[RetryPolicy],
        http_client: Optional[httpx.AsyncClient],
    ) -> None:
        self._config = config
        self.retry_policy = retry_policy or RetryPolicy(max_attempts=config.max_retries)
        self._transport = Transport(config.base_url, config.timeout, http=http_client)
        self._fetcher = PageFetcher(self._transport, config.api_key)

        self.filings = FilingsResource(self)
        self.insider = InsiderResource(self)
        self.institutional = InstitutionalResource(self)
        self.companies = CompaniesResource(self)

        logger.info(
            f"Initialized EarningsFeed client for {config.base_url} "
            f"(timeout={config.timeout:g}s, max_attempts={self.retry_policy.max_attempts})"
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    async def aclose(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self._transport.aclose()

    async def __aenter__(self) -> "EarningsFeed":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"EarningsFeed(base_url={self.base_url!r}, timeout={self._config.timeout:g})"


# Shared instance
_client: Optional[EarningsFeed] = None


def get_client(**kwargs) -> EarningsFeed:
    """
    Get or create the shared EarningsFeed client.

    Arguments configure the client on the first call. Later calls may repeat
    them, but asking for different settings raises ``ConfigurationError``;
    construct ``EarningsFeed`` directly when a second client is needed.
    """
    global _client
    if _client is None:
        _client = EarningsFeed(**kwargs)
        return _client

    conflicts = _conflicting_settings(_client, kwargs)
    if conflicts:
        raise ConfigurationError(
            f"shared client already exists with different {', '.join(conflicts)}",
            details={"fields": conflicts},
        )
    return _client


def _conflicting_settings(client: EarningsFeed, requested: dict) -> list[str]:
    current = {
        "api_key": client.config.api_key,
        "base_url": client.config.base_url,
        "timeout": client.config.timeout,
        "max_retries": client.config.max_retries,
        "retry_policy": client.retry_policy,
    }
    conflicts = []
    for name, value in requested.items():
        if value is None:
            continue
        if name == "http_client":
            if value is not client._transport._client:
                conflicts.append(name)
        elif name == "base_url":
            if value.rstrip("/") != current[name]:
                conflicts.append(name)
        elif name not in current or current[name] != value:
            conflicts.append(name)
    return conflicts
