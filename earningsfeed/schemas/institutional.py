from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field

from earningsfeed.schemas.common import APIModel


class SharesType(str, Enum):
    """Shares (SH) or principal amount (PRN)."""

    SH = "SH"
    PRN = "PRN"


class PutCall(str, Enum):
    """Option type of a holding."""

    PUT = "Put"
    CALL = "Call"


class InvestmentDiscretion(str, Enum):
    """Investment discretion reported on the 13F."""

    SOLE = "SOLE"
    DFND = "DFND"
    OTHER = "OTHER"


class InstitutionalHolding(APIModel):
    """Schema for one position from a 13F institutional holdings report."""

    cusip: str = Field(..., description="CUSIP identifier")
    issuer_name: str = Field(..., description="Issuer name")
    class_title: str = Field(..., description="Title of the security class")
    company_cik: Optional[int] = Field(None, description="Issuer CIK, when resolved")
    ticker: Optional[str] = Field(None, description="Issuer ticker symbol")
    value: Decimal = Field(..., description="Market value in USD")
    shares: Decimal = Field(..., description="Shares or principal amount")
    shares_type: SharesType = Field(..., description="SH or PRN")
    put_call: Optional[PutCall] = Field(None, description="Put/Call, for option positions")
    investment_discretion: InvestmentDiscretion = Field(..., description="SOLE, DFND or OTHER")
    other_manager: Optional[str] = Field(None, description="Other manager reference")
    voting_sole: Optional[Decimal] = Field(None, description="Sole voting authority")
    voting_shared: Optional[Decimal] = Field(None, description="Shared voting authority")
    voting_none: Optional[Decimal] = Field(None, description="No voting authority")
    manager_cik: int = Field(..., description="Manager (filer) CIK")
    manager_name: str = Field(..., description="Manager name")
    report_period_date: date = Field(..., description="Quarter end the report covers")
    filed_at: datetime = Field(..., description="When the 13F was filed")
    accession_number: str = Field(..., description="SEC accession number of the 13F")
