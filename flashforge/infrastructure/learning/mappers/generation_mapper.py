"""Mappers for Generation and GenerationErrorLog ORM ↔ Domain conversion."""

from flashforge.domain.common.value_objects import GenerationErrorLogId, GenerationId, UserId
from flashforge.domain.learning.entities.generation import Generation
from flashforge.domain.learning.entities.generation_error_log import GenerationErrorLog
from flashforge.models import Generation as GenerationORM
from flashforge.models import GenerationErrorLog as GenerationErrorLogORM


class GenerationMapper:
    """Mapper for Generation ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: GenerationORM) -> Generation:
        """Convert ORM model to domain entity."""
        return Generation.create_with_id(
            id=GenerationId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            model_name=orm_model.model,
            source_text_length=orm_model.source_text_length,
            source_text_hash=orm_model.source_text_hash,
            generated_count=orm_model.generated_count,
            duration_seconds=orm_model.generation_duration,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(
        self, domain_entity: Generation, orm_model: GenerationORM | None = None
    ) -> GenerationORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Only the outcome changes after the attempt is recorded
            orm_model.generated_count = domain_entity.generated_count
            orm_model.generation_duration = domain_entity.duration_seconds
            return orm_model

        return GenerationORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            user_id=domain_entity.user_id.value,
            model=domain_entity.model_name,
            source_text_length=domain_entity.source_text_length,
            source_text_hash=domain_entity.source_text_hash,
            generated_count=domain_entity.generated_count,
            generation_duration=domain_entity.duration_seconds,
        )


class GenerationErrorLogMapper:
    def to_domain(self, orm_model: GenerationErrorLogORM) -> GenerationErrorLog:
        return GenerationErrorLog(
            id=GenerationErrorLogId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            error_message=orm_model.error_message,
            error_code=orm_model.error_code,
            source_text_hash=orm_model.source_text_hash,
            source_text_length=orm_model.source_text_length,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: GenerationErrorLog) -> GenerationErrorLogORM:
        return GenerationErrorLogORM(
            user_id=domain_entity.user_id.value,
            error_message=domain_entity.error_message,
            error_code=domain_entity.error_code,
            source_text_hash=domain_entity.source_text_hash,
            source_text_length=domain_entity.source_text_length,
        )
