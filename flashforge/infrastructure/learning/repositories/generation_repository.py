"""Repositories for generation bookkeeping."""

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashforge.application.common.pagination import Pagination
from flashforge.domain.common.value_objects.ids import GenerationId, UserId
from flashforge.domain.learning.entities.generation import Generation
from flashforge.domain.learning.entities.generation_error_log import GenerationErrorLog
from flashforge.exceptions import PersistenceError
from flashforge.infrastructure.learning.mappers.generation_mapper import (
    GenerationErrorLogMapper,
    GenerationMapper,
)
from flashforge.models import Generation as GenerationORM


class GenerationRepository:
    """Repository for Generation domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = GenerationMapper()

    def find_by_id(self, generation_id: GenerationId, user_id: UserId) -> Generation | None:
        """Find a generation by ID, scoped to its owner."""
        stmt = select(GenerationORM).where(
            GenerationORM.id == generation_id.value,
            GenerationORM.user_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_page(
        self, user_id: UserId, pagination: Pagination
    ) -> tuple[list[Generation], int]:
        count_stmt = select(func.count(GenerationORM.id)).where(
            GenerationORM.user_id == user_id.value
        )
        total = self.db.execute(count_stmt).scalar() or 0

        stmt = (
            select(GenerationORM)
            .where(GenerationORM.user_id == user_id.value)
            .order_by(GenerationORM.created_at.desc(), GenerationORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models], total

    def save(self, generation: Generation) -> Generation:
        """
        Save a generation entity (create or update).

        Raises:
            PersistenceError: If the database rejects the write
        """
        try:
            if generation.id.value == 0:
                orm_model = self.mapper.to_orm(generation)
                self.db.add(orm_model)
            else:
                orm_model = self.db.get(GenerationORM, generation.id.value)
                if not orm_model:
                    raise PersistenceError(f"Generation {generation.id.value} not found")
                self.mapper.to_orm(generation, orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to save generation: {e.__class__.__name__}") from e
        return self.mapper.to_domain(orm_model)


class GenerationErrorLogRepository:
    """Append-only store for failed generation attempts."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = GenerationErrorLogMapper()

    def save(self, error_log: GenerationErrorLog) -> GenerationErrorLog:
        orm_model = self.mapper.to_orm(error_log)
        try:
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(
                f"Failed to save generation error log: {e.__class__.__name__}"
            ) from e
        return self.mapper.to_domain(orm_model)
