"""Pagination model shared by all listings."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

T = TypeVar("T")


class PageRequest(BaseModel):
    """Validated page request (1-indexed)."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def parse(
        cls,
        page: object,
        limit: object,
        default_limit: int = 10,
        max_limit: int = 50,
    ) -> "PageRequest":
        """Build a page request from untrusted query values.

        Invalid values degrade to defaults instead of failing: a missing,
        non-numeric or non-positive page becomes 1, a missing, non-numeric or
        non-positive limit becomes default_limit, and limit is capped at
        max_limit.
        """
        page_number = _positive_int(page) or 1
        page_size = _positive_int(limit) or default_limit
        return cls(page=page_number, limit=min(page_size, max_limit))


class Page(BaseModel, Generic[T]):
    """One page of a listing.

    total_pages is never less than 1, so an empty listing has one empty page.
    """

    items: list[T]
    current_page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total_items: int = Field(ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_items / self.page_size))

    @classmethod
    def build(cls, items: list[T], total: int, request: PageRequest) -> "Page[T]":
        return cls(
            items=items,
            current_page=request.page,
            page_size=request.limit,
            total_items=total,
        )


def _positive_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number >= 1 else None
