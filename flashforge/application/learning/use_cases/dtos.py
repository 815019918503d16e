"""DTOs for learning use cases."""

from dataclasses import dataclass, field

from flashforge.domain.learning.entities.flashcard import Flashcard


@dataclass(frozen=True)
class CreateFlashcardCommand:
    """One flashcard to persist, as submitted by the client."""

    front: str
    back: str
    source: str
    generated_id: int | None = None


@dataclass(frozen=True)
class UpdateFlashcardCommand:
    """Partial update of a flashcard. ``None`` means leave unchanged."""

    front: str | None = None
    back: str | None = None
    source: str | None = None
    generated_id: int | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.front is None
            and self.back is None
            and self.source is None
            and self.generated_id is None
        )


@dataclass(frozen=True)
class FlashcardProposal:
    """Unsaved flashcard suggested by the model."""

    front: str
    back: str
    source: str
    generated_id: int


@dataclass
class GenerationResult:
    generation_id: int
    flashcards_proposals: list[FlashcardProposal]
    generated_count: int


@dataclass(frozen=True)
class FailedFlashcard:
    """An input item that could not be saved, echoed back with the reason."""

    flashcard: CreateFlashcardCommand
    error: str


@dataclass
class BatchSaveResult:
    """Outcome of a batch save, in input order."""

    data: list[Flashcard] = field(default_factory=list)
    failed: list[FailedFlashcard] = field(default_factory=list)

    @property
    def is_full_success(self) -> bool:
        return not self.failed

    @property
    def is_partial_success(self) -> bool:
        return bool(self.data) and bool(self.failed)

    @property
    def is_full_failure(self) -> bool:
        return not self.data
