"""
Resources

One class per API area; all share the pagination and error machinery.
"""
from earningsfeed.resources.filings import FilingsResource
from earningsfeed.resources.insider import InsiderResource
from earningsfeed.resources.institutional import InstitutionalResource
from earningsfeed.resources.companies import CompaniesResource

__all__ = [
    "FilingsResource",
    "InsiderResource",
    "InstitutionalResource",
    "CompaniesResource",
]
