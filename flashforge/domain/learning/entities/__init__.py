"""Learning context entities."""

from .flashcard import Flashcard, FlashcardSource
from .generation import Generation
from .generation_error_log import GenerationErrorLog

__all__ = [
    "Flashcard",
    "FlashcardSource",
    "Generation",
    "GenerationErrorLog",
]
