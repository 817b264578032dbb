"""Async Python client for the EarningsFeed SEC filings, insider and 13F API."""

__version__ = "0.1.0"

from earningsfeed.client import EarningsFeed, get_client
from earningsfeed.core.config import ClientConfig, Settings, get_settings
from earningsfeed.core.errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    EarningsFeedError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    ValidationError,
)
from earningsfeed.http.retry import RetryPolicy
from earningsfeed.pagination import AsyncPaginator, StreamState
from earningsfeed.schemas import (
    Company,
    CompanySearchResult,
    Filing,
    FilingDetail,
    FilingStatus,
    InsiderTransaction,
    InstitutionalHolding,
    ListFilingsParams,
    ListInsiderParams,
    ListInstitutionalParams,
    Page,
    PutCallFilter,
    SearchCompaniesParams,
    TransactionDirection,
)
from earningsfeed.urls import build_archive_dir_url, build_document_url, build_viewer_url

__all__ = [
    "__version__",
    "EarningsFeed",
    "get_client",
    "ClientConfig",
    "Settings",
    "get_settings",
    "APIError",
    "AuthenticationError",
    "ConfigurationError",
    "DecodeError",
    "EarningsFeedError",
    "ErrorKind",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "ValidationError",
    "RetryPolicy",
    "AsyncPaginator",
    "StreamState",
    "Company",
    "CompanySearchResult",
    "Filing",
    "FilingDetail",
    "FilingStatus",
    "InsiderTransaction",
    "InstitutionalHolding",
    "ListFilingsParams",
    "ListInsiderParams",
    "ListInstitutionalParams",
    "Page",
    "PutCallFilter",
    "SearchCompaniesParams",
    "TransactionDirection",
    "build_archive_dir_url",
    "build_document_url",
    "build_viewer_url",
]
