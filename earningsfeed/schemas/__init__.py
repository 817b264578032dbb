"""
Schemas

Pydantic models for API responses and request parameters.
"""
from earningsfeed.schemas.common import APIModel, Page
from earningsfeed.schemas.filings import (
    EntityClass,
    Filing,
    FilingCompany,
    FilingDetail,
    FilingDocument,
    FilingRole,
)
from earningsfeed.schemas.insider import AcquiredDisposed, DirectIndirect, InsiderTransaction
from earningsfeed.schemas.institutional import (
    InstitutionalHolding,
    InvestmentDiscretion,
    PutCall,
    SharesType,
)
from earningsfeed.schemas.companies import Address, Company, CompanySearchResult, SicCode, Ticker
from earningsfeed.schemas.params import (
    FilingStatus,
    ListFilingsParams,
    ListInsiderParams,
    ListInstitutionalParams,
    PutCallFilter,
    QueryParams,
    SearchCompaniesParams,
    TransactionDirection,
)

__all__ = [
    "APIModel",
    "Page",
    "EntityClass",
    "Filing",
    "FilingCompany",
    "FilingDetail",
    "FilingDocument",
    "FilingRole",
    "AcquiredDisposed",
    "DirectIndirect",
    "InsiderTransaction",
    "InstitutionalHolding",
    "InvestmentDiscretion",
    "PutCall",
    "SharesType",
    "Address",
    "Company",
    "CompanySearchResult",
    "SicCode",
    "Ticker",
    "FilingStatus",
    "ListFilingsParams",
    "ListInsiderParams",
    "ListInstitutionalParams",
    "PutCallFilter",
    "QueryParams",
    "SearchCompaniesParams",
    "TransactionDirection",
]
