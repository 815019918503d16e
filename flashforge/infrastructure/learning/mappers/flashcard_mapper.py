"""Mapper for Flashcard ORM ↔ Domain conversion."""

from flashforge.domain.common.value_objects import FlashcardId, GenerationId, UserId
from flashforge.domain.learning.entities.flashcard import Flashcard, FlashcardSource
from flashforge.models import Flashcard as FlashcardORM


class FlashcardMapper:
    """Mapper for Flashcard ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: FlashcardORM) -> Flashcard:
        """Convert ORM model to domain entity."""
        return Flashcard.create_with_id(
            id=FlashcardId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            front=orm_model.front,
            back=orm_model.back,
            source=FlashcardSource(orm_model.source),
            generated_id=GenerationId(orm_model.generated_id) if orm_model.generated_id else None,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(
        self, domain_entity: Flashcard, orm_model: FlashcardORM | None = None
    ) -> FlashcardORM:
        """Convert domain entity to ORM model."""
        generated_id = domain_entity.generated_id.value if domain_entity.generated_id else None
        if orm_model:
            # Update existing
            orm_model.front = domain_entity.front
            orm_model.back = domain_entity.back
            orm_model.source = domain_entity.source.value
            orm_model.generated_id = generated_id
            return orm_model

        # Create new
        return FlashcardORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            user_id=domain_entity.user_id.value,
            front=domain_entity.front,
            back=domain_entity.back,
            source=domain_entity.source.value,
            generated_id=generated_id,
        )
