"""Common API schemas."""

from flashforge.infrastructure.common.schemas.response_wrappers import (
    PaginatedResponse,
    PaginationMeta,
)

__all__ = ["PaginatedResponse", "PaginationMeta"]
