from __future__ import annotations
from typing import Generic, List, Optional, TypeVar
import pandas as pd
from pydantic import Field

from pypolar.models.base import Base

T = TypeVar("T")


class PaginationInfo(Base):
    """
    Pagination block of a list response. The API always sends total_count and
    max_page; page and limit are filled in from the request when absent.
    """

    total_count: int = Field(..., ge=0)
    max_page: int = Field(..., ge=0)
    page: Optional[int] = None
    limit: Optional[int] = None


class PaginatedResponse(Base, Generic[T]):
    """One page of a collection: the items in server order plus pagination info."""

    items: List[T]
    pagination: PaginationInfo

    @property
    def has_next_page(self) -> bool:
        page = 1 if self.pagination.page is None else self.pagination.page
        return bool(self.items) and page < self.pagination.max_page

    def to_dataframe(self, **kwargs) -> pd.DataFrame:
        """One row per item."""
        if self.items and isinstance(self.items[0], Base):
            return type(self.items[0]).collection_to_dataframe(self.items, **kwargs)
        return pd.DataFrame(list(self.items), **kwargs)
