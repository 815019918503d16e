"""Common value objects shared across all domain modules."""

from .ids import FlashcardId, GenerationErrorLogId, GenerationId, UserId

__all__ = [
    "FlashcardId",
    "GenerationErrorLogId",
    "GenerationId",
    "UserId",
]
