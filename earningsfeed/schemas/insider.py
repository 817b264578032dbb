from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field

from earningsfeed.schemas.common import APIModel


class AcquiredDisposed(str, Enum):
    """Whether shares were acquired (A) or disposed of (D)."""

    A = "A"
    D = "D"


class DirectIndirect(str, Enum):
    """Direct (D) or indirect (I) ownership."""

    D = "D"
    I = "I"  # noqa: E741


class InsiderTransaction(APIModel):
    """Schema for a Form 3/4/5 insider transaction."""

    accession_number: str = Field(..., description="SEC accession number of the source filing")
    filed_at: datetime = Field(..., description="When the form was filed")
    form_type: str = Field(..., description="Form type (3, 4, 5 and amendments)")
    person_cik: int = Field(..., description="Reporting person's CIK")
    person_name: str = Field(..., description="Reporting person's name")
    company_cik: int = Field(..., description="Issuer CIK")
    company_name: Optional[str] = Field(None, description="Issuer name")
    ticker: Optional[str] = Field(None, description="Issuer ticker symbol")
    is_director: bool = Field(False, description="Person is a director")
    is_officer: bool = Field(False, description="Person is an officer")
    is_ten_percent_owner: bool = Field(False, description="Person owns 10% or more")
    is_other: bool = Field(False, description="Other relationship to the issuer")
    officer_title: Optional[str] = Field(None, description="Officer title, if an officer")
    security_title: str = Field(..., description="Title of the security")
    is_derivative: bool = Field(False, description="Derivative (options, warrants) vs. common stock")
    transaction_date: date = Field(..., description="Date of the transaction")
    transaction_code: str = Field(..., description="Transaction code (P, S, A, M, ...)")
    equity_swap_involved: bool = Field(False, description="Whether an equity swap was involved")
    shares: Optional[Decimal] = Field(None, description="Number of shares")
    price_per_share: Optional[Decimal] = Field(None, description="Price per share")
    acquired_disposed: AcquiredDisposed = Field(..., description="Acquired (A) or disposed (D)")
    shares_after: Optional[Decimal] = Field(None, description="Shares owned after the transaction")
    direct_indirect: DirectIndirect = Field(..., description="Direct (D) or indirect (I) ownership")
    ownership_nature: Optional[str] = Field(None, description="Nature of indirect ownership")
    conversion_or_exercise_price: Optional[Decimal] = Field(None, description="Derivative conversion or exercise price")
    exercise_date: Optional[date] = Field(None, description="Derivative exercise date")
    expiration_date: Optional[date] = Field(None, description="Derivative expiration date")
    underlying_security_title: Optional[str] = Field(None, description="Underlying security title")
    underlying_shares: Optional[Decimal] = Field(None, description="Underlying shares")
    transaction_value: Optional[Decimal] = Field(None, description="Total transaction value")

    @property
    def is_purchase(self) -> bool:
        """Open-market or private purchase (transaction code P)."""
        return self.transaction_code == "P"

    @property
    def is_sale(self) -> bool:
        """Open-market or private sale (transaction code S)."""
        return self.transaction_code == "S"
