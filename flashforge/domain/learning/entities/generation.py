"""
Generation entity: bookkeeping for one AI flashcard generation attempt.
"""

from dataclasses import dataclass
from datetime import datetime

from flashforge.domain.common.entity import Entity
from flashforge.domain.common.exceptions import ValidationError
from flashforge.domain.common.value_objects import GenerationId, UserId


@dataclass
class Generation(Entity[GenerationId]):
    """
    A single request to produce flashcard proposals from source text.

    The source text itself is never stored, only its length and hash.
    The attempt is recorded with zero counts before the model is called and
    the outcome is written once the call resolves.
    """

    id: GenerationId
    user_id: UserId
    model_name: str
    source_text_length: int
    source_text_hash: str
    generated_count: int = 0
    duration_seconds: float = 0.0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.source_text_length < 0:
            raise ValidationError(
                "Source text length cannot be negative", field="source_text_length"
            )
        if not self.source_text_hash:
            raise ValidationError("Source text hash cannot be empty", field="source_text_hash")
        if not self.model_name or not self.model_name.strip():
            raise ValidationError("Model name cannot be empty", field="model_name")

    def record_outcome(self, generated_count: int, duration_seconds: float) -> None:
        """
        Record how many proposals the model produced and how long it took.

        Raises:
            ValidationError: If count or duration is negative
        """
        if generated_count < 0:
            raise ValidationError("Generated count cannot be negative", field="generated_count")
        if duration_seconds < 0:
            raise ValidationError("Duration cannot be negative", field="duration_seconds")
        self.generated_count = generated_count
        self.duration_seconds = duration_seconds

    @classmethod
    def start(
        cls,
        user_id: UserId,
        model_name: str,
        source_text_length: int,
        source_text_hash: str,
    ) -> "Generation":
        """Create a fresh attempt with zero counts (ID will be 0 until persisted)."""
        return cls(
            id=GenerationId.generate(),
            user_id=user_id,
            model_name=model_name.strip(),
            source_text_length=source_text_length,
            source_text_hash=source_text_hash,
        )

    @classmethod
    def create_with_id(
        cls,
        id: GenerationId,
        user_id: UserId,
        model_name: str,
        source_text_length: int,
        source_text_hash: str,
        generated_count: int,
        duration_seconds: float,
        created_at: datetime | None,
        updated_at: datetime | None,
    ) -> "Generation":
        """Reconstitute a generation from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            model_name=model_name,
            source_text_length=source_text_length,
            source_text_hash=source_text_hash,
            generated_count=generated_count,
            duration_seconds=duration_seconds,
            created_at=created_at,
            updated_at=updated_at,
        )
