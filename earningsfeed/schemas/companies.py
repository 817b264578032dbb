from datetime import datetime
from typing import Optional

from pydantic import Field

from earningsfeed.schemas.common import APIModel


class Ticker(APIModel):
    symbol: str = Field(..., description="Ticker symbol")
    exchange: str = Field(..., description="Exchange the ticker trades on")
    is_primary: bool = Field(False, description="Whether this is the primary listing")


class SicCode(APIModel):
    code: int = Field(..., description="Standard Industrial Classification code")
    description: str = Field(..., description="SIC code description")


class Address(APIModel):
    address_type: str = Field(..., alias="type", description="Address type (business, mailing)")
    street1: Optional[str] = None
    street2: Optional[str] = None
    city: Optional[str] = None
    state_or_country: Optional[str] = None
    state_or_country_description: Optional[str] = None
    zip_code: Optional[str] = None


class Company(APIModel):
    """Full company profile."""

    cik: int = Field(..., description="SEC Central Index Key (CIK)")
    name: str = Field(..., description="Official company name")
    entity_type: Optional[str] = Field(None, description="Entity type (e.g., 'operating')")
    category: Optional[str] = Field(None, description="Filer category (e.g., 'Large accelerated filer')")
    description: Optional[str] = Field(None, description="Business description")
    tickers: list[Ticker] = Field(default_factory=list, description="Listed tickers")
    primary_ticker: Optional[str] = Field(None, description="Primary ticker symbol")
    sic_codes: list[SicCode] = Field(default_factory=list, description="SIC codes")
    ein: Optional[str] = Field(None, description="Employer Identification Number")
    fiscal_year_end: Optional[str] = Field(None, description="Fiscal year end as MMDD string")
    state_of_incorporation: Optional[str] = Field(None, description="State of incorporation abbreviation")
    state_of_incorporation_description: Optional[str] = Field(None, description="State of incorporation, spelled out")
    phone: Optional[str] = None
    website: Optional[str] = None
    investor_website: Optional[str] = None
    addresses: list[Address] = Field(default_factory=list, description="Business and mailing addresses")
    logo_url: Optional[str] = None
    has_insider_transactions: bool = Field(False, description="Whether insider transactions exist for the company")
    is_insider: bool = Field(False, description="Whether the entity files as an insider")
    updated_at: datetime = Field(..., description="Last update timestamp")


class CompanySearchResult(APIModel):
    """Company as returned by search."""

    cik: int = Field(..., description="SEC Central Index Key (CIK)")
    name: str = Field(..., description="Official company name")
    ticker: Optional[str] = None
    exchange: Optional[str] = None
    entity_type: Optional[str] = None
    category: Optional[str] = None
    sic_code: Optional[int] = None
    sic_description: Optional[str] = None
    logo_url: Optional[str] = None
