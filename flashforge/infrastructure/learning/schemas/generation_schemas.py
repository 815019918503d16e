"""Pydantic schemas for Generation API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from flashforge.application.learning.use_cases.dtos import GenerationResult
from flashforge.domain.learning.entities.generation import Generation as GenerationEntity

SOURCE_TEXT_MIN_LENGTH = 1000
SOURCE_TEXT_MAX_LENGTH = 10000


class GenerationCreateRequest(BaseModel):
    """Schema for requesting flashcard proposals."""

    source_text: str = Field(
        ...,
        min_length=SOURCE_TEXT_MIN_LENGTH,
        max_length=SOURCE_TEXT_MAX_LENGTH,
        description="Text to generate flashcards from",
    )


class FlashcardProposal(BaseModel):
    """Unsaved flashcard suggested by the model."""

    front: str
    back: str
    source: str = Field(..., description="Always 'ai-full' for fresh proposals")
    generated_id: int


class GenerationCreateResponse(BaseModel):
    generation_id: int
    flashcards_proposals: list[FlashcardProposal]
    generated_count: int

    @classmethod
    def from_result(cls, result: GenerationResult) -> "GenerationCreateResponse":
        return cls(
            generation_id=result.generation_id,
            flashcards_proposals=[
                FlashcardProposal(
                    front=proposal.front,
                    back=proposal.back,
                    source=proposal.source,
                    generated_id=proposal.generated_id,
                )
                for proposal in result.flashcards_proposals
            ],
            generated_count=result.generated_count,
        )


class Generation(BaseModel):
    """Schema for Generation response."""

    id: int
    model: str
    source_text_length: int
    source_text_hash: str
    generated_count: int
    generation_duration: float = Field(..., description="Seconds spent waiting for the model")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, entity: GenerationEntity) -> "Generation":
        return cls(
            id=entity.id.value,
            model=entity.model_name,
            source_text_length=entity.source_text_length,
            source_text_hash=entity.source_text_hash,
            generated_count=entity.generated_count,
            generation_duration=entity.duration_seconds,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
