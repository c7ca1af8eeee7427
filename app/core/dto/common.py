import math
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.utils.enums import SortOrderEnum


T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ListQuery(CamelModel):
    """
    Search/filter/sort/paginate request shared by every listable resource.

    `sort_by` holds the public (camelCase) field name; each repository maps it
    to a column through its own whitelist.
    """
    search: str | None = Field(None, max_length=100)
    status: str | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    sort_by: str = "createdAt"
    sort_order: SortOrderEnum = SortOrderEnum.DESC
    date_from: datetime | None = None
    date_to: datetime | None = None

    @field_validator("search", "status", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("sort_order", mode="before")
    @classmethod
    def normalize_sort_order(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value

    @model_validator(mode="after")
    def validate_date_range(self) -> "ListQuery":
        if self.date_from and self.date_to and self.date_to < self.date_from:
            raise ValueError("dateTo must be after dateFrom")
        return self

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationModel(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    page_size: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, total_items: int, page: int, page_size: int) -> "PaginationModel":
        # An empty result still renders as one (empty) page
        total_pages = max(1, math.ceil(total_items / page_size))
        current_page = min(max(page, 1), total_pages)
        return cls(
            current_page=current_page,
            total_pages=total_pages,
            total_items=total_items,
            page_size=page_size,
            has_next_page=current_page < total_pages,
            has_prev_page=current_page > 1,
        )


class ErrorModel(CamelModel):
    code: str
    message: str
    details: Any = None


class ResponseEnvelope(CamelModel, Generic[T]):
    success: bool = True
    data: T | None = None
    pagination: PaginationModel | None = None
    error: ErrorModel | None = None
    message: str | None = None


class ErrorEnvelope(CamelModel):
    success: bool = False
    error: ErrorModel
