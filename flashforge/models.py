"""SQLAlchemy ORM models."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from flashforge.database import Base


class Generation(Base):
    """One request to an LLM to produce flashcard proposals."""

    __tablename__ = "generations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    model: Mapped[str] = mapped_column(String(255), nullable=False)
    source_text_length: Mapped[int] = mapped_column(Integer, nullable=False)
    source_text_hash: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    generated_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    generation_duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    flashcards: Mapped[list["Flashcard"]] = relationship(
        back_populates="generation", passive_deletes=True
    )

    def __repr__(self) -> str:
        """String representation of Generation."""
        return f"<Generation(id={self.id}, model='{self.model}', count={self.generated_count})>"


class Flashcard(Base):
    """A user's study card."""

    __tablename__ = "flashcards"
    __table_args__ = (
        CheckConstraint(
            "source IN ('manual', 'ai-full', 'ai-edited')", name="ck_flashcards_source"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    front: Mapped[str] = mapped_column(String(200), nullable=False)
    back: Mapped[str] = mapped_column(String(500), nullable=False)
    source: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    generated_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("generations.id", ondelete="SET NULL"), index=True, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    generation: Mapped[Generation | None] = relationship(back_populates="flashcards")

    def __repr__(self) -> str:
        """String representation of Flashcard."""
        return f"<Flashcard(id={self.id}, source='{self.source}')>"


class GenerationErrorLog(Base):
    """Audit record of a failed generation attempt."""

    __tablename__ = "generations_error_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    error_code: Mapped[str] = mapped_column(String(100), nullable=False)
    error_message: Mapped[str] = mapped_column(Text, nullable=False)
    source_text_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    source_text_length: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        """String representation of GenerationErrorLog."""
        return f"<GenerationErrorLog(id={self.id}, error_code='{self.error_code}')>"
