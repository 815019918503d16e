"""Protocol for Flashcard repository in learning context."""

from typing import Protocol

from flashforge.application.common.pagination import Pagination
from flashforge.domain.common.value_objects.ids import FlashcardId, UserId
from flashforge.domain.learning.entities.flashcard import Flashcard, FlashcardSource


class FlashcardRepositoryProtocol(Protocol):
    """Protocol for Flashcard repository operations in learning context."""

    def find_by_id(self, flashcard_id: FlashcardId, user_id: UserId) -> Flashcard | None:
        """
        Find a flashcard by ID with user ownership check.

        Args:
            flashcard_id: The flashcard ID
            user_id: The user ID for ownership verification

        Returns:
            Flashcard entity if found and owned by user, None otherwise
        """
        ...

    def find_page(
        self,
        user_id: UserId,
        pagination: Pagination,
        source: FlashcardSource | None = None,
        search: str | None = None,
        newest_first: bool = True,
    ) -> tuple[list[Flashcard], int]:
        """
        Get one page of a user's flashcards.

        Args:
            user_id: The owner
            pagination: Page and limit
            source: Only return cards with this source
            search: Case-insensitive substring matched against front and back
            newest_first: Order by created_at descending when True

        Returns:
            Tuple of (flashcards on the page, total matching count)
        """
        ...

    def save(self, flashcard: Flashcard) -> Flashcard:
        """
        Save a flashcard entity (create or update).

        Raises:
            PersistenceError: If the store rejects the write
        """
        ...

    def delete(self, flashcard_id: FlashcardId, user_id: UserId) -> bool:
        """
        Delete a flashcard.

        Returns:
            True if deleted, False if not found
        """
        ...
