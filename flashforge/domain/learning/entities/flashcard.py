"""
Flashcard entity: a question/answer pair written by hand or proposed by the model.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from flashforge.domain.common.entity import Entity
from flashforge.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from flashforge.domain.common.value_objects import FlashcardId, GenerationId, UserId

FRONT_MIN_LENGTH = 3
FRONT_MAX_LENGTH = 200
BACK_MIN_LENGTH = 3
BACK_MAX_LENGTH = 500


class FlashcardSource(StrEnum):
    """Where the content of a flashcard came from."""

    MANUAL = "manual"
    AI_FULL = "ai-full"
    AI_EDITED = "ai-edited"

    @property
    def is_ai(self) -> bool:
        return self is not FlashcardSource.MANUAL


def _validate_side(value: str, field: str, min_length: int, max_length: int) -> str:
    # Bounds apply to the text as submitted, which is also what gets stored
    text = value or ""
    if not text.strip():
        raise ValidationError(f"{field.capitalize()} cannot be blank", field=field)
    if len(text) < min_length:
        raise ValidationError(
            f"{field.capitalize()} must be at least {min_length} characters",
            field=field,
        )
    if len(text) > max_length:
        raise ValidationError(
            f"{field.capitalize()} cannot exceed {max_length} characters",
            field=field,
        )
    return text


@dataclass
class Flashcard(Entity[FlashcardId]):
    """
    Flashcard owned by a single user.

    Business Rules:
    - Front is 3-200 characters, back is 3-500 characters
    - AI-sourced cards (ai-full, ai-edited) must reference the generation they came from
    - Manual cards never reference a generation
    """

    id: FlashcardId
    user_id: UserId
    front: str
    back: str
    source: FlashcardSource
    generated_id: GenerationId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.front = _validate_side(self.front, "front", FRONT_MIN_LENGTH, FRONT_MAX_LENGTH)
        self.back = _validate_side(self.back, "back", BACK_MIN_LENGTH, BACK_MAX_LENGTH)
        self.source = FlashcardSource(self.source)
        self._check_generation_reference(self.source, self.generated_id)

    @staticmethod
    def _check_generation_reference(
        source: FlashcardSource, generated_id: GenerationId | None
    ) -> None:
        if source.is_ai and generated_id is None:
            raise BusinessRuleViolationError(
                "ai_flashcard_requires_generation",
                f"generated_id is required for source '{source}'",
            )
        if source is FlashcardSource.MANUAL and generated_id is not None:
            raise BusinessRuleViolationError(
                "manual_flashcard_has_no_generation",
                "generated_id must not be set for manual flashcards",
            )

    def update_front(self, front: str) -> None:
        """
        Update the front (question) side.

        Raises:
            ValidationError: If the text is too short or too long
        """
        self.front = _validate_side(front, "front", FRONT_MIN_LENGTH, FRONT_MAX_LENGTH)

    def update_back(self, back: str) -> None:
        """
        Update the back (answer) side.

        Raises:
            ValidationError: If the text is too short or too long
        """
        self.back = _validate_side(back, "back", BACK_MIN_LENGTH, BACK_MAX_LENGTH)

    def change_source(
        self, source: FlashcardSource, generated_id: GenerationId | None = None
    ) -> None:
        """
        Change where the card is considered to come from.

        Only ``manual`` and ``ai-edited`` can be set on an existing card.
        Switching to ``manual`` drops the generation reference. Switching to
        ``ai-edited`` needs the generation to point at, even when the card
        already references one.

        Raises:
            ValidationError: If the source cannot be set on an existing card
            BusinessRuleViolationError: If ai-edited is requested without generated_id
        """
        source = FlashcardSource(source)
        if source is FlashcardSource.AI_FULL:
            raise ValidationError(
                "Source can only be changed to 'manual' or 'ai-edited'",
                field="source",
                value=str(source),
            )

        if source is FlashcardSource.MANUAL:
            self.source = source
            self.generated_id = None
            return

        self._check_generation_reference(source, generated_id)
        self.source = source
        self.generated_id = generated_id

    @classmethod
    def create(
        cls,
        user_id: UserId,
        front: str,
        back: str,
        source: FlashcardSource,
        generated_id: GenerationId | None = None,
    ) -> "Flashcard":
        """Create a new flashcard (ID will be 0 until persisted)."""
        return cls(
            id=FlashcardId.generate(),
            user_id=user_id,
            front=front,
            back=back,
            source=source,
            generated_id=generated_id,
        )

    @classmethod
    def create_with_id(
        cls,
        id: FlashcardId,
        user_id: UserId,
        front: str,
        back: str,
        source: FlashcardSource,
        created_at: datetime | None,
        updated_at: datetime | None,
        generated_id: GenerationId | None = None,
    ) -> "Flashcard":
        """Reconstitute a flashcard from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            front=front,
            back=back,
            source=source,
            generated_id=generated_id,
            created_at=created_at,
            updated_at=updated_at,
        )
