"""Tests for the engine built for the flashcard store."""

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from flashforge import models
from tests.conftest import TEST_USER_ID, create_test_flashcard, create_test_generation


def test_deleting_generation_detaches_its_flashcards(db_session: Session) -> None:
    generation = create_test_generation(db_session, TEST_USER_ID)
    flashcard = create_test_flashcard(
        db_session, TEST_USER_ID, source="ai-full", generated_id=generation.id
    )

    db_session.execute(delete(models.Generation).where(models.Generation.id == generation.id))
    db_session.commit()
    db_session.expire_all()

    assert db_session.get(models.Flashcard, flashcard.id).generated_id is None


def test_flashcard_cannot_reference_missing_generation(db_session: Session) -> None:
    with pytest.raises(IntegrityError):
        create_test_flashcard(db_session, TEST_USER_ID, source="ai-full", generated_id=424242)

    db_session.rollback()
    assert db_session.query(models.Flashcard).count() == 0
