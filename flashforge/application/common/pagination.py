"""
Pagination types for list queries.

Example:
    items, total = repo.find_page(user_id, pagination)
    return PaginatedResult(items=items, total=total, pagination=pagination)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    """
    Pagination parameters for list queries.

    Attributes:
        page: Current page number (1-indexed)
        limit: Number of items per page
    """

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("Page must be at least 1")
        if self.limit < 1:
            raise ValueError("Limit must be at least 1")
        if self.limit > MAX_PAGE_SIZE:
            raise ValueError(f"Limit cannot exceed {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        """Calculate the offset for database queries."""
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """
    Paginated result containing items and metadata.

    Attributes:
        items: List of items for the current page
        total: Total number of items across all pages
        pagination: The pagination parameters used
    """

    items: list[T]
    total: int
    pagination: Pagination

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def limit(self) -> int:
        return self.pagination.limit

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.pagination.limit - 1) // self.pagination.limit
