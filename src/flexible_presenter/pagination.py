"""Pagination wrappers: a page of items plus the metadata describing it."""

import math
from abc import abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlencode

from pydantic import BaseModel, Field, model_validator

from .fields import to_plain


class BasePaginator(BaseModel):
    """Common state for paginated item lists."""
    items: List[Any] = Field(default_factory=list, description="Items on the current page")
    per_page: int = Field(..., ge=1, description="Number of items per page")
    current_page: int = Field(default=1, ge=1, description="Current page number (1-based)")
    path: str = Field(default="/", description="Base path used to build page URLs")
    page_name: str = Field(default="page", description="Query parameter holding the page number")
    query: Dict[str, Any] = Field(default_factory=dict, description="Extra query parameters added to page URLs")

    def url(self, page: int) -> str:
        """Build the URL for a given page number."""
        page = max(page, 1)
        params = {**self.query, self.page_name: page}
        separator = "&" if "?" in self.path else "?"
        return f"{self.path}{separator}{urlencode(params)}"

    def first_item(self) -> Optional[int]:
        """1-based position of the first item on this page, None when empty."""
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + 1

    def last_item(self) -> Optional[int]:
        """1-based position of the last item on this page, None when empty."""
        first = self.first_item()
        if first is None:
            return None
        return first + len(self.items) - 1

    def previous_page_url(self) -> Optional[str]:
        if self.current_page > 1:
            return self.url(self.current_page - 1)
        return None

    @abstractmethod
    def has_more_pages(self) -> bool:
        """Whether a page follows the current one."""

    def next_page_url(self) -> Optional[str]:
        if self.has_more_pages():
            return self.url(self.current_page + 1)
        return None

    def with_items(self, items: Sequence[Any]) -> "BasePaginator":
        """Return a copy of this paginator wrapping different items."""
        return self.model_copy(update={"items": list(items)})

    @abstractmethod
    def to_plain_data(self) -> Dict[str, Any]:
        """Plain mapping of the page items and metadata."""


class Paginator(BasePaginator):
    """
    Simple paginator that only knows whether another page exists.

    Pass up to ``per_page + 1`` items: an extra item marks that a next page
    exists and is dropped from the page.
    """
    has_more: Optional[bool] = Field(default=None, description="Whether a page follows this one")

    @model_validator(mode="after")
    def trim_items(self) -> "Paginator":
        if self.has_more is None:
            self.has_more = len(self.items) > self.per_page
            self.items = self.items[:self.per_page]
        return self

    def has_more_pages(self) -> bool:
        return bool(self.has_more)

    def to_plain_data(self) -> Dict[str, Any]:
        return {
            "current_page": self.current_page,
            "data": to_plain(self.items),
            "first_page_url": self.url(1),
            "from": self.first_item(),
            "next_page_url": self.next_page_url(),
            "path": self.path,
            "per_page": self.per_page,
            "prev_page_url": self.previous_page_url(),
            "to": self.last_item(),
        }


class LengthAwarePaginator(BasePaginator):
    """Paginator that knows the total number of items across all pages."""
    total: int = Field(..., ge=0, description="Total number of items across all pages")

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page

    def to_plain_data(self) -> Dict[str, Any]:
        return {
            "current_page": self.current_page,
            "data": to_plain(self.items),
            "first_page_url": self.url(1),
            "from": self.first_item(),
            "last_page": self.last_page,
            "last_page_url": self.url(self.last_page),
            "next_page_url": self.next_page_url(),
            "path": self.path,
            "per_page": self.per_page,
            "prev_page_url": self.previous_page_url(),
            "to": self.last_item(),
            "total": self.total,
        }


def paginate(items: Sequence[Any], per_page: int, page: int = 1, **options: Any) -> LengthAwarePaginator:
    """Slice a full item sequence into a LengthAwarePaginator for one page."""
    items = list(items)
    start = (page - 1) * per_page
    return LengthAwarePaginator(
        items=items[start:start + per_page],
        total=len(items),
        per_page=per_page,
        current_page=page,
        **options
    )
