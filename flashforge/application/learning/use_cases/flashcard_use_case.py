"""Use case for flashcard operations."""

import structlog

from flashforge.application.common.pagination import Pagination, PaginatedResult
from flashforge.application.learning.protocols.flashcard_repository import (
    FlashcardRepositoryProtocol,
)
from flashforge.application.learning.protocols.generation_repository import (
    GenerationRepositoryProtocol,
)
from flashforge.application.learning.use_cases.dtos import (
    BatchSaveResult,
    CreateFlashcardCommand,
    FailedFlashcard,
    UpdateFlashcardCommand,
)
from flashforge.application.learning.use_cases.exceptions import FlashcardNotFoundError
from flashforge.domain.common.exceptions import AuthorizationError, DomainError
from flashforge.domain.common.value_objects.ids import FlashcardId, GenerationId, UserId
from flashforge.domain.learning.entities.flashcard import Flashcard, FlashcardSource
from flashforge.exceptions import FlashforgeError, ValidationError

logger = structlog.get_logger(__name__)

SORT_NEWEST_FIRST = "-created_at"
SORT_OLDEST_FIRST = "created_at"


def _parse_source(source: str) -> FlashcardSource:
    try:
        return FlashcardSource(source)
    except ValueError as e:
        allowed = ", ".join(s.value for s in FlashcardSource)
        raise ValidationError(f"Invalid source '{source}'. Allowed values: {allowed}") from e


class FlashcardUseCase:
    """Use case for flashcard CRUD and batch saving."""

    def __init__(
        self,
        flashcard_repository: FlashcardRepositoryProtocol,
        generation_repository: GenerationRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.flashcard_repository = flashcard_repository
        self.generation_repository = generation_repository

    def create_flashcards(
        self, commands: list[CreateFlashcardCommand], user_id: str
    ) -> BatchSaveResult:
        """
        Save many flashcards at once, each one independently.

        A failing item never prevents the others from being saved. Saved
        flashcards and failed items keep the order they were submitted in.

        Args:
            commands: Flashcards to save
            user_id: ID of the user

        Returns:
            BatchSaveResult with saved flashcards and failed items
        """
        user_id_vo = UserId(user_id)
        result = BatchSaveResult()

        for index, command in enumerate(commands):
            try:
                result.data.append(self._save_new(command, user_id_vo))
            except (DomainError, FlashforgeError) as e:
                logger.info("flashcard_batch_item_rejected", index=index, error=e.message)
                result.failed.append(FailedFlashcard(flashcard=command, error=e.message))
            except Exception as e:
                logger.error(
                    "flashcard_batch_item_failed", index=index, error=str(e), exc_info=True
                )
                result.failed.append(
                    FailedFlashcard(flashcard=command, error=f"Unexpected error: {e}")
                )

        logger.info(
            "flashcards_batch_saved",
            user_id=user_id,
            saved=len(result.data),
            failed=len(result.failed),
        )
        return result

    def create_flashcard(self, command: CreateFlashcardCommand, user_id: str) -> Flashcard:
        """
        Create a single flashcard.

        Raises:
            ValidationError: If the source is unknown
            DomainError: If the content or generation reference is invalid
            AuthorizationError: If the referenced generation is not the user's
        """
        flashcard = self._save_new(command, UserId(user_id))
        logger.info(
            "created_flashcard",
            flashcard_id=flashcard.id.value,
            source=str(flashcard.source),
        )
        return flashcard

    def list_flashcards(
        self,
        user_id: str,
        pagination: Pagination,
        source: str | None = None,
        search: str | None = None,
        sort: str = SORT_NEWEST_FIRST,
    ) -> PaginatedResult[Flashcard]:
        """
        List a user's flashcards.

        Args:
            user_id: ID of the user
            pagination: Page and limit
            source: Optional source filter
            search: Optional case-insensitive text matched against front and back
            sort: ``-created_at`` (newest first) or ``created_at``

        Raises:
            ValidationError: If the source or sort value is not recognised
        """
        if sort not in (SORT_NEWEST_FIRST, SORT_OLDEST_FIRST):
            raise ValidationError(
                f"Invalid sort '{sort}'. Allowed values: {SORT_OLDEST_FIRST}, {SORT_NEWEST_FIRST}"
            )
        source_filter = _parse_source(source) if source else None
        search_term = search.strip() if search and search.strip() else None

        items, total = self.flashcard_repository.find_page(
            UserId(user_id),
            pagination,
            source=source_filter,
            search=search_term,
            newest_first=sort == SORT_NEWEST_FIRST,
        )
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def get_flashcard(self, flashcard_id: int, user_id: str) -> Flashcard:
        flashcard = self.flashcard_repository.find_by_id(
            FlashcardId(flashcard_id), UserId(user_id)
        )
        if flashcard is None:
            raise FlashcardNotFoundError(flashcard_id)
        return flashcard

    def update_flashcard(
        self, flashcard_id: int, user_id: str, command: UpdateFlashcardCommand
    ) -> Flashcard:
        """
        Update a flashcard's content and/or source.

        Every check runs before anything is written, so a rejected update
        leaves the stored flashcard untouched.

        Args:
            flashcard_id: ID of the flashcard
            user_id: ID of the user
            command: Fields to change

        Returns:
            Updated flashcard domain entity

        Raises:
            ValidationError: If no field is given or the source is not allowed
            FlashcardNotFoundError: If flashcard is not found
            AuthorizationError: If the referenced generation is not the user's
        """
        if command.is_empty:
            raise ValidationError(
                "At least one of front, back, source or generated_id must be provided"
            )
        if command.generated_id is not None and command.source is None:
            raise ValidationError("generated_id can only be changed together with source")
        if command.source == FlashcardSource.AI_EDITED and command.generated_id is None:
            raise ValidationError("generated_id is required when source is 'ai-edited'")

        user_id_vo = UserId(user_id)
        flashcard = self.get_flashcard(flashcard_id, user_id)

        if command.front is not None:
            flashcard.update_front(command.front)
        if command.back is not None:
            flashcard.update_back(command.back)
        if command.source is not None:
            generated_id = None
            if command.generated_id is not None:
                generated_id = self._ensure_generation_owned(command.generated_id, user_id_vo)
            flashcard.change_source(_parse_source(command.source), generated_id)

        flashcard = self.flashcard_repository.save(flashcard)

        logger.info("updated_flashcard", flashcard_id=flashcard_id)
        return flashcard

    def delete_flashcard(self, flashcard_id: int, user_id: str) -> None:
        """
        Delete a flashcard.

        Raises:
            FlashcardNotFoundError: If flashcard is not found
        """
        deleted = self.flashcard_repository.delete(FlashcardId(flashcard_id), UserId(user_id))
        if not deleted:
            raise FlashcardNotFoundError(flashcard_id)

        logger.info("deleted_flashcard", flashcard_id=flashcard_id)

    def _save_new(self, command: CreateFlashcardCommand, user_id: UserId) -> Flashcard:
        source = _parse_source(command.source)
        generated_id = (
            GenerationId(command.generated_id) if command.generated_id is not None else None
        )

        # Builds and validates the entity before touching the store
        flashcard = Flashcard.create(
            user_id=user_id,
            front=command.front,
            back=command.back,
            source=source,
            generated_id=generated_id,
        )
        if flashcard.generated_id is not None:
            self._ensure_generation_owned(flashcard.generated_id.value, user_id)

        return self.flashcard_repository.save(flashcard)

    def _ensure_generation_owned(self, generation_id: int, user_id: UserId) -> GenerationId:
        generation_id_vo = GenerationId(generation_id)
        if self.generation_repository.find_by_id(generation_id_vo, user_id) is None:
            raise AuthorizationError(
                f"Generation {generation_id} does not exist or does not belong to the current user"
            )
        return generation_id_vo
