"""Common response wrapper schemas for API responses."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from flashforge.application.common.pagination import PaginatedResult

T = TypeVar("T")


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic pagination wrapper."""

    data: list[T]
    pagination: PaginationMeta

    @classmethod
    def build(cls, items: list[T], result: PaginatedResult) -> "PaginatedResponse[T]":
        return cls(
            data=items,
            pagination=PaginationMeta(page=result.page, limit=result.limit, total=result.total),
        )
