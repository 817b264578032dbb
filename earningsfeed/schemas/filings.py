from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from earningsfeed.schemas.common import APIModel
from earningsfeed.urls import build_archive_dir_url, build_document_url


class EntityClass(str, Enum):
    """Whether the filer is a company or an individual."""

    COMPANY = "company"
    PERSON = "person"


class FilingCompany(APIModel):
    """Company information embedded in a filing."""

    cik: int = Field(..., description="SEC Central Index Key (CIK)")
    name: str = Field(..., description="Official company name")
    state_of_incorporation: Optional[str] = Field(None, description="State of incorporation abbreviation")
    state_of_incorporation_description: Optional[str] = Field(None, description="State of incorporation, spelled out")
    fiscal_year_end: Optional[str] = Field(None, description="Fiscal year end as MMDD string")


class Filing(APIModel):
    """Schema for a single SEC filing as returned by list endpoints."""

    accession_number: str = Field(..., description="SEC accession number for the filing")
    accession_no_dashes: Optional[str] = Field(None, description="Accession number without dashes")
    cik: int = Field(..., description="Filer CIK")
    company_name: Optional[str] = Field(None, description="Company name")
    form_type: str = Field(..., description="Form type (e.g., 10-K, 10-Q, 8-K)")
    filed_at: datetime = Field(..., description="When the filing was submitted to SEC")
    accept_ts: Optional[datetime] = Field(None, description="When SEC accepted the filing")
    provisional: bool = Field(False, description="Whether the record is still provisional")
    feed_day: Optional[str] = Field(None, description="Feed day (YYYY-MM-DD)")
    size_bytes: int = Field(0, description="Total filing size in bytes")
    url: str = Field(..., description="URL of the filing on SEC")
    title: str = Field(..., description="Filing title")
    status: str = Field(..., description="Filing status (provisional or final)")
    updated_at: datetime = Field(..., description="Last update timestamp")
    primary_ticker: Optional[str] = Field(None, description="Primary ticker symbol")
    primary_exchange: Optional[str] = Field(None, description="Primary exchange (e.g., 'NASDAQ', 'NYSE')")
    company: Optional[FilingCompany] = Field(None, description="Embedded company information")
    sorted_at: datetime = Field(..., description="Timestamp used for ordering")
    logo_url: Optional[str] = Field(None, description="Company logo URL")
    entity_class: Optional[EntityClass] = Field(None, description="Filer entity class")

    @property
    def archive_url(self) -> str:
        """URL of the filing's directory in the SEC archives."""
        return build_archive_dir_url(self.cik, self.accession_number)


class FilingDocument(APIModel):
    """A document contained in a filing."""

    seq: int = Field(..., description="Sequence number within the filing")
    filename: str = Field(..., description="Document filename")
    doc_type: str = Field(..., description="Document type (e.g., 10-K, EX-21.1)")
    description: Optional[str] = Field(None, description="Document description")
    is_primary: bool = Field(False, description="Whether this is the primary document")


class FilingRole(APIModel):
    """An entity's role in a filing (filer, subject, reporting owner...)."""

    cik: int = Field(..., description="Entity CIK")
    role: str = Field(..., description="Role name")


class FilingDetail(APIModel):
    """Detailed filing information, including documents and roles."""

    accession_number: str = Field(..., description="SEC accession number for the filing")
    accession_no_dashes: Optional[str] = Field(None, description="Accession number without dashes")
    cik: int = Field(..., description="Filer CIK")
    form_type: str = Field(..., description="Form type (e.g., 10-K, 10-Q, 8-K)")
    filed_at: datetime = Field(..., description="When the filing was submitted to SEC")
    accept_ts: Optional[datetime] = Field(None, description="When SEC accepted the filing")
    provisional: bool = Field(False, description="Whether the record is still provisional")
    feed_day: Optional[str] = Field(None, description="Feed day (YYYY-MM-DD)")
    title: str = Field(..., description="Filing title")
    url: str = Field(..., description="URL of the filing on SEC")
    size_bytes: int = Field(0, description="Total filing size in bytes")
    sec_relative_dir: Optional[str] = Field(None, description="Relative directory on SEC servers")
    company_name: Optional[str] = Field(None, description="Company name")
    primary_ticker: Optional[str] = Field(None, description="Primary ticker symbol")
    company: Optional[FilingCompany] = Field(None, description="Embedded company information")
    documents: list[FilingDocument] = Field(default_factory=list, description="Documents in this filing")
    roles: list[FilingRole] = Field(default_factory=list, description="Entity roles in this filing")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "accessionNumber": "0000320193-24-000123",
                "cik": 320193,
                "formType": "10-K",
                "filedAt": "2024-11-01T16:30:00Z",
                "title": "Annual report",
                "url": "https://www.sec.gov/Archives/edgar/data/320193/000032019324000123/",
                "documents": [
                    {"seq": 1, "filename": "aapl-20240928.htm", "docType": "10-K", "isPrimary": True}
                ],
                "roles": [{"cik": 320193, "role": "filer"}],
            }
        }
    )

    @property
    def primary_document(self) -> Optional[FilingDocument]:
        """The document flagged as primary, if any."""
        return next((doc for doc in self.documents if doc.is_primary), None)

    def document_urls(self) -> dict[str, str]:
        """Map each document filename to its SEC archive URL."""
        return {
            doc.filename: build_document_url(self.cik, self.accession_number, doc.filename)
            for doc in self.documents
        }
