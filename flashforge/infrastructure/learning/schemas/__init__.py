"""Learning API schemas."""

from flashforge.infrastructure.learning.schemas.flashcard_schemas import (
    AIFlashcardCreate,
    FailedFlashcard,
    Flashcard,
    FlashcardBatchCreateRequest,
    FlashcardBatchCreateResponse,
    FlashcardCreate,
    FlashcardInput,
    FlashcardResponse,
    FlashcardUpdateRequest,
    ManualFlashcardCreate,
)
from flashforge.infrastructure.learning.schemas.generation_schemas import (
    FlashcardProposal,
    Generation,
    GenerationCreateRequest,
    GenerationCreateResponse,
)

__all__ = [
    "AIFlashcardCreate",
    "FailedFlashcard",
    "Flashcard",
    "FlashcardBatchCreateRequest",
    "FlashcardBatchCreateResponse",
    "FlashcardCreate",
    "FlashcardInput",
    "FlashcardProposal",
    "FlashcardResponse",
    "FlashcardUpdateRequest",
    "Generation",
    "GenerationCreateRequest",
    "GenerationCreateResponse",
    "ManualFlashcardCreate",
]
