from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class APIModel(BaseModel):
    """Base for response models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Page(APIModel, Generic[T]):
    """One page of a paginated list endpoint."""

    items: list[T] = Field(default_factory=list, description="Items in this page, in server order")
    next_cursor: Optional[str] = Field(None, description="Opaque cursor (or offset) for the next page")
    has_more: bool = Field(False, description="Whether more results exist beyond this page")
    total: Optional[int] = Field(None, description="Total matching results, when the server reports it")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "items": [],
                "nextCursor": "eyJpZCI6MTIzfQ",
                "hasMore": True,
            }
        }
    )

    @field_validator("next_cursor", mode="before")
    @classmethod
    def _cursor_as_string(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if value == "":
            return None
        return value

    @property
    def cursor_for_next_page(self) -> Optional[str]:
        """Cursor to continue with, or None when this is the last page."""
        if self.has_more and self.next_cursor:
            return self.next_cursor
        return None
