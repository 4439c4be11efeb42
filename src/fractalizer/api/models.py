"""Request DTOs for the API layer."""

from typing import Optional

from pydantic import BaseModel, Field


class ListParams(BaseModel):
    """Validated paging parameters for collection endpoints."""
    page: int = Field(default=1, ge=1)
    per_page: Optional[int] = Field(default=None, ge=1)
