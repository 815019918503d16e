"""Use case for browsing past generation attempts."""

from flashforge.application.common.pagination import Pagination, PaginatedResult
from flashforge.application.learning.protocols.generation_repository import (
    GenerationRepositoryProtocol,
)
from flashforge.application.learning.use_cases.exceptions import GenerationNotFoundError
from flashforge.domain.common.value_objects.ids import GenerationId, UserId
from flashforge.domain.learning.entities.generation import Generation


class GenerationHistoryUseCase:
    """Read-only access to a user's generation attempts."""

    def __init__(self, generation_repository: GenerationRepositoryProtocol) -> None:
        """Initialize use case with repository protocols."""
        self.generation_repository = generation_repository

    def list_generations(
        self, user_id: str, pagination: Pagination
    ) -> PaginatedResult[Generation]:
        """List a user's generation attempts, newest first."""
        items, total = self.generation_repository.find_page(UserId(user_id), pagination)
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def get_generation(self, generation_id: int, user_id: str) -> Generation:
        """
        Get a single generation attempt.

        Raises:
            GenerationNotFoundError: If missing or owned by another user
        """
        generation = self.generation_repository.find_by_id(
            GenerationId(generation_id), UserId(user_id)
        )
        if generation is None:
            raise GenerationNotFoundError(generation_id)
        return generation
