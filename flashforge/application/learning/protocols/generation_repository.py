"""Protocols for generation bookkeeping repositories."""

from typing import Protocol

from flashforge.application.common.pagination import Pagination
from flashforge.domain.common.value_objects.ids import GenerationId, UserId
from flashforge.domain.learning.entities.generation import Generation
from flashforge.domain.learning.entities.generation_error_log import GenerationErrorLog


class GenerationRepositoryProtocol(Protocol):
    """Protocol for Generation repository operations."""

    def find_by_id(self, generation_id: GenerationId, user_id: UserId) -> Generation | None:
        """
        Find a generation by ID with user ownership check.

        Returns:
            Generation entity if found and owned by user, None otherwise
        """
        ...

    def find_page(
        self, user_id: UserId, pagination: Pagination
    ) -> tuple[list[Generation], int]:
        """Get one page of a user's generations, newest first, with the total count."""
        ...

    def save(self, generation: Generation) -> Generation:
        """
        Save a generation entity (create or update).

        Raises:
            PersistenceError: If the store rejects the write
        """
        ...


class GenerationErrorLogRepositoryProtocol(Protocol):
    def save(self, error_log: GenerationErrorLog) -> GenerationErrorLog: ...
