"""
SEC URL helpers

Builds links into SEC EDGAR for filings returned by the API: the archive
directory of a filing, individual documents inside it, and the inline XBRL
viewer.
"""
from typing import Union

SEC_ARCHIVES_URL = "https://www.sec.gov/Archives/edgar/data"
SEC_VIEWER_URL = "https://www.sec.gov/cgi-bin/viewer"

Cik = Union[int, str]


def build_archive_dir_url(cik: Cik, accession_number: str) -> str:
    """
    Build URL to the archive directory holding all documents of a filing.

    Args:
        cik: Filer CIK, with or without leading zeros (e.g., 320193 or "0000320193")
        accession_number: Accession number with dashes (e.g., "0000320193-24-000123")

    Example:
        >>> build_archive_dir_url(320193, "0000320193-24-000123")
        'https://www.sec.gov/Archives/edgar/data/320193/000032019324000123'
    """
    # Archive paths use the unpadded CIK and the accession number without dashes
    cik_plain = str(int(cik))
    accession_no_dashes = accession_number.replace("-", "")
    return f"{SEC_ARCHIVES_URL}/{cik_plain}/{accession_no_dashes}"


def build_document_url(cik: Cik, accession_number: str, filename: str) -> str:
    """
    Build URL to one document of a filing.

    Example:
        >>> build_document_url(320193, "0000320193-24-000123", "aapl-20240928.htm")
        'https://www.sec.gov/Archives/edgar/data/320193/000032019324000123/aapl-20240928.htm'
    """
    return f"{build_archive_dir_url(cik, accession_number)}/{filename}"


def build_viewer_url(cik: Cik, accession_number: str) -> str:
    """Build URL to SEC's inline XBRL viewer for a filing."""
    cik_padded = str(int(cik)).zfill(10)
    return (
        f"{SEC_VIEWER_URL}"
        f"?action=view"
        f"&cik={cik_padded}"
        f"&accession_number={accession_number}"
        f"&xbrl_type=v"
    )
