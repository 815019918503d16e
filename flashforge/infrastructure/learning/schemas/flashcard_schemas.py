"""Pydantic schemas for Flashcard API request/response validation."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from flashforge.application.learning.use_cases.dtos import (
    BatchSaveResult,
    CreateFlashcardCommand,
    UpdateFlashcardCommand,
)
from flashforge.domain.learning.entities.flashcard import (
    BACK_MAX_LENGTH,
    BACK_MIN_LENGTH,
    FRONT_MAX_LENGTH,
    FRONT_MIN_LENGTH,
    Flashcard as FlashcardEntity,
)

FrontText = Annotated[
    str,
    Field(
        min_length=FRONT_MIN_LENGTH,
        max_length=FRONT_MAX_LENGTH,
        description="Question side of the flashcard",
    ),
]
BackText = Annotated[
    str,
    Field(
        min_length=BACK_MIN_LENGTH,
        max_length=BACK_MAX_LENGTH,
        description="Answer side of the flashcard",
    ),
]

MAX_BATCH_SIZE = 100


class ManualFlashcardCreate(BaseModel):
    """A flashcard written by hand. Never references a generation."""

    front: FrontText
    back: BackText
    source: Literal["manual"]
    generated_id: None = Field(None, description="Must be omitted for manual flashcards")

    def to_command(self) -> CreateFlashcardCommand:
        return CreateFlashcardCommand(front=self.front, back=self.back, source=self.source)


class AIFlashcardCreate(BaseModel):
    """A flashcard accepted from a generation, as proposed or after editing."""

    front: FrontText
    back: BackText
    source: Literal["ai-full", "ai-edited"]
    generated_id: int = Field(..., gt=0, description="Generation the flashcard came from")

    def to_command(self) -> CreateFlashcardCommand:
        return CreateFlashcardCommand(
            front=self.front,
            back=self.back,
            source=self.source,
            generated_id=self.generated_id,
        )


FlashcardCreate = Annotated[
    ManualFlashcardCreate | AIFlashcardCreate, Field(discriminator="source")
]


class FlashcardBatchCreateRequest(BaseModel):
    """Schema for saving many flashcards in one request."""

    flashcards: list[FlashcardCreate] = Field(
        ..., min_length=1, max_length=MAX_BATCH_SIZE, description="Flashcards to save"
    )


class FlashcardUpdateRequest(BaseModel):
    """Schema for updating a flashcard. Omitted fields are left unchanged."""

    front: FrontText | None = None
    back: BackText | None = None
    source: Literal["manual", "ai-edited"] | None = Field(
        None, description="New source; only 'manual' and 'ai-edited' can be set"
    )
    generated_id: int | None = Field(None, gt=0, description="Generation for 'ai-edited'")

    def to_command(self) -> UpdateFlashcardCommand:
        return UpdateFlashcardCommand(
            front=self.front,
            back=self.back,
            source=self.source,
            generated_id=self.generated_id,
        )


class Flashcard(BaseModel):
    """Schema for Flashcard response."""

    id: int
    front: str
    back: str
    source: str
    generated_id: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, entity: FlashcardEntity) -> "Flashcard":
        return cls(
            id=entity.id.value,
            front=entity.front,
            back=entity.back,
            source=entity.source.value,
            generated_id=entity.generated_id.value if entity.generated_id else None,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class FlashcardResponse(BaseModel):
    data: Flashcard


class FlashcardInput(BaseModel):
    """A submitted flashcard, echoed back when it could not be saved."""

    front: str
    back: str
    source: str
    generated_id: int | None = None


class FailedFlashcard(BaseModel):
    flashcard: FlashcardInput
    error: str = Field(..., description="Why the flashcard was not saved")


class FlashcardBatchCreateResponse(BaseModel):
    """Schema for batch save response, in submission order."""

    data: list[Flashcard] = Field(..., description="Saved flashcards")
    failed: list[FailedFlashcard] = Field(..., description="Flashcards that were not saved")

    @classmethod
    def from_result(cls, result: BatchSaveResult) -> "FlashcardBatchCreateResponse":
        return cls(
            data=[Flashcard.from_entity(flashcard) for flashcard in result.data],
            failed=[
                FailedFlashcard(
                    flashcard=FlashcardInput(
                        front=item.flashcard.front,
                        back=item.flashcard.back,
                        source=item.flashcard.source,
                        generated_id=item.flashcard.generated_id,
                    ),
                    error=item.error,
                )
                for item in result.failed
            ],
        )
