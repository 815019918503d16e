"""Exceptions for learning use cases."""

from flashforge.exceptions import NotFoundError


class FlashcardNotFoundError(NotFoundError):
    """Flashcard not found error."""

    def __init__(self, flashcard_id: int) -> None:
        self.flashcard_id = flashcard_id
        super().__init__(f"Flashcard with id {flashcard_id} not found")


class GenerationNotFoundError(NotFoundError):
    """Generation not found error."""

    def __init__(self, generation_id: int) -> None:
        self.generation_id = generation_id
        super().__init__(f"Generation with id {generation_id} not found")
