"""Page-number pagination metadata for collection envelopes."""

import math
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, Field


class PaginationLinks(BaseModel):
    previous: Optional[str] = None
    next: Optional[str] = None


class Pagination(BaseModel):
    """Pagination block rendered under ``meta.pagination``."""
    total: int = Field(..., ge=0, description="Total number of items across all pages")
    count: int = Field(..., ge=0, description="Number of items on this page")
    per_page: int = Field(..., ge=1)
    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    links: PaginationLinks = Field(default_factory=PaginationLinks)


class PagePaginator:
    """
    Compute pagination metadata for one page of a collection.

    Links carry the original query parameters (including the include
    selection) so following ``next`` keeps the same shape of response.
    """

    def __init__(
        self,
        total: int,
        count: int,
        page: int = 1,
        per_page: int = 15,
        base_url: str = "",
        params: Optional[Mapping[str, Any]] = None,
    ):
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if per_page < 1:
            raise ValueError(f"per_page must be >= 1, got {per_page}")
        self.total = total
        self.count = count
        self.page = page
        self.per_page = per_page
        self.base_url = base_url
        self.params = dict(params or {})

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.per_page) if self.total else 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    def url_for(self, page: int) -> str:
        query = {k: v for k, v in self.params.items() if v is not None and k != "page"}
        query["page"] = page
        return f"{self.base_url}?{urlencode(query)}"

    def build(self) -> Pagination:
        links = PaginationLinks()
        if self.page > 1:
            links.previous = self.url_for(min(self.page - 1, max(self.total_pages, 1)))
        if self.page < self.total_pages:
            links.next = self.url_for(self.page + 1)
        return Pagination(
            total=self.total,
            count=self.count,
            per_page=self.per_page,
            current_page=self.page,
            total_pages=self.total_pages,
            links=links,
        )

    def to_meta(self) -> Dict[str, Any]:
        return self.build().model_dump(exclude_none=True)
