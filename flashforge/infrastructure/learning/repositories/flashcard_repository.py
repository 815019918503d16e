"""Repository for Flashcard domain entities."""

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashforge.application.common.pagination import Pagination
from flashforge.domain.common.value_objects.ids import FlashcardId, UserId
from flashforge.domain.learning.entities.flashcard import Flashcard, FlashcardSource
from flashforge.exceptions import PersistenceError
from flashforge.infrastructure.learning.mappers.flashcard_mapper import FlashcardMapper
from flashforge.models import Flashcard as FlashcardORM

LIKE_ESCAPE = "\\"


def _like_pattern(search: str) -> str:
    """Wrap a search term for a substring LIKE, matching %, _ and \\ literally."""
    escaped = (
        search.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class FlashcardRepository:
    """Repository for Flashcard domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = FlashcardMapper()

    def find_by_id(self, flashcard_id: FlashcardId, user_id: UserId) -> Flashcard | None:
        """
        Find a flashcard by ID with user ownership check.

        Args:
            flashcard_id: The flashcard ID
            user_id: The user ID for ownership verification

        Returns:
            Flashcard entity if found and owned by user, None otherwise
        """
        stmt = select(FlashcardORM).where(
            FlashcardORM.id == flashcard_id.value,
            FlashcardORM.user_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_page(
        self,
        user_id: UserId,
        pagination: Pagination,
        source: FlashcardSource | None = None,
        search: str | None = None,
        newest_first: bool = True,
    ) -> tuple[list[Flashcard], int]:
        """
        Get one page of a user's flashcards with the total matching count.

        Search is a case-insensitive substring match on front and back.
        """
        conditions = [FlashcardORM.user_id == user_id.value]
        if source is not None:
            conditions.append(FlashcardORM.source == source.value)
        if search:
            pattern = _like_pattern(search)
            conditions.append(
                or_(
                    FlashcardORM.front.ilike(pattern, escape=LIKE_ESCAPE),
                    FlashcardORM.back.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        count_stmt = select(func.count(FlashcardORM.id)).where(*conditions)
        total = self.db.execute(count_stmt).scalar() or 0

        if newest_first:
            order_by = (FlashcardORM.created_at.desc(), FlashcardORM.id.desc())
        else:
            order_by = (FlashcardORM.created_at.asc(), FlashcardORM.id.asc())

        stmt = (
            select(FlashcardORM)
            .where(*conditions)
            .order_by(*order_by)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models], total

    def save(self, flashcard: Flashcard) -> Flashcard:
        """
        Save a flashcard entity (create or update).

        A failed write is rolled back before the error is raised, so the
        session stays usable for the next flashcard.

        Raises:
            PersistenceError: If the database rejects the write
        """
        try:
            if flashcard.id.value == 0:
                # Create new
                orm_model = self.mapper.to_orm(flashcard)
                self.db.add(orm_model)
            else:
                # Update existing
                orm_model = self.db.get(FlashcardORM, flashcard.id.value)
                if not orm_model:
                    raise PersistenceError(f"Flashcard {flashcard.id.value} not found")
                self.mapper.to_orm(flashcard, orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to save flashcard: {e.__class__.__name__}") from e
        return self.mapper.to_domain(orm_model)

    def delete(self, flashcard_id: FlashcardId, user_id: UserId) -> bool:
        """
        Delete a flashcard.

        Returns:
            True if deleted, False if not found
        """
        stmt = select(FlashcardORM).where(
            FlashcardORM.id == flashcard_id.value,
            FlashcardORM.user_id == user_id.value,
        )
        flashcard_orm = self.db.execute(stmt).scalar_one_or_none()

        if not flashcard_orm:
            return False

        self.db.delete(flashcard_orm)
        self.db.commit()
        return True
