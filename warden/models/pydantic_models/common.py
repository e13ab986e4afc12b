"""
Shared pieces of the paged list responses.
"""

from pydantic import BaseModel

from warden.models.security import SortDirection


class PageInfo(BaseModel):
    total: int
    filter: str | None = None
    sort_direction: SortDirection | None = None
    page_index: int = 0
    page_size: int | None = None
