"""
Query parameter models.

Each endpoint takes an immutable parameter set whose fields all default to
``None``. Unset fields are left out of the query string entirely so the
server applies its own defaults. Values are type-checked once, at
construction; combinations of filters are left for the server to judge.
"""
from datetime import date
from enum import Enum
from collections.abc import Iterable
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

CURSOR_PARAM = "cursor"


class FilingStatus(str, Enum):
    ALL = "all"
    PROVISIONAL = "provisional"
    FINAL = "final"


class TransactionDirection(str, Enum):
    BUY = "buy"
    SELL = "sell"


class PutCallFilter(str, Enum):
    PUT = "put"
    CALL = "call"
    EQUITY = "equity"


DateLike = Union[date, str]


def _serialize(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _join_csv(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, Iterable):
        return ",".join(str(v) for v in value)
    return value


class QueryParams(BaseModel):
    """Base for endpoint parameter sets."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    limit: Optional[int] = None
    cursor: Optional[str] = None

    def to_query(self) -> dict[str, str]:
        """Serialize the set fields to query-string values keyed by wire name."""
        query: dict[str, str] = {}
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None:
                continue
            query[field.alias or name] = _serialize(value)
        return query

    def with_cursor(self, cursor: Optional[str]):
        """Copy of these parameters positioned at ``cursor``."""
        return self.model_copy(update={"cursor": cursor})


class ListFilingsParams(QueryParams):
    """Filters for listing SEC filings."""

    forms: Optional[str] = None
    ticker: Optional[str] = None
    cik: Optional[int] = None
    status: Optional[FilingStatus] = None
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None
    q: Optional[str] = None

    @field_validator("forms", mode="before")
    @classmethod
    def _forms_csv(cls, value):
        return _join_csv(value)


class ListInsiderParams(QueryParams):
    """Filters for listing insider transactions."""

    ticker: Optional[str] = None
    cik: Optional[int] = None
    person_cik: Optional[int] = None
    direction: Optional[TransactionDirection] = None
    codes: Optional[str] = None
    derivative: Optional[bool] = None
    min_value: Optional[int] = None
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None

    @field_validator("codes", mode="before")
    @classmethod
    def _codes_csv(cls, value):
        return _join_csv(value)


class ListInstitutionalParams(QueryParams):
    """Filters for listing 13F institutional holdings."""

    cik: Optional[int] = None
    ticker: Optional[str] = None
    cusip: Optional[str] = None
    manager_cik: Optional[int] = None
    min_value: Optional[int] = None
    put_call: Optional[PutCallFilter] = None
    report_period: Optional[DateLike] = None


class SearchCompaniesParams(QueryParams):
    """Filters for company search."""

    q: Optional[str] = None
    ticker: Optional[str] = None
    sic_code: Optional[int] = None
    state: Optional[str] = None
