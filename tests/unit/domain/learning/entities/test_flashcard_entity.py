"""Tests for Flashcard entity."""

import pytest

from flashforge.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from flashforge.domain.common.value_objects.ids import FlashcardId, GenerationId, UserId
from flashforge.domain.learning.entities.flashcard import Flashcard, FlashcardSource

USER = UserId("user-1")


def _ai_card(generated_id: int = 7) -> Flashcard:
    return Flashcard.create(
        user_id=USER,
        front="What is an enzyme?",
        back="A biological catalyst",
        source=FlashcardSource.AI_FULL,
        generated_id=GenerationId(generated_id),
    )


class TestCreate:
    def test_create_manual(self) -> None:
        card = Flashcard.create(
            user_id=USER,
            front="  What is a cell?  ",
            back="The basic unit of life",
            source=FlashcardSource.MANUAL,
        )

        assert card.id == FlashcardId(0)
        assert not card.id.is_persisted
        assert card.front == "  What is a cell?  "
        assert card.generated_id is None

    def test_front_length_bounds(self) -> None:
        Flashcard.create(user_id=USER, front="abc", back="abc", source=FlashcardSource.MANUAL)
        Flashcard.create(user_id=USER, front="a" * 200, back="abc", source=FlashcardSource.MANUAL)

        with pytest.raises(ValidationError, match="at least 3"):
            Flashcard.create(user_id=USER, front="ab", back="abc", source=FlashcardSource.MANUAL)
        with pytest.raises(ValidationError, match="cannot exceed 200"):
            Flashcard.create(
                user_id=USER, front="a" * 201, back="abc", source=FlashcardSource.MANUAL
            )

    def test_back_length_bounds(self) -> None:
        Flashcard.create(user_id=USER, front="abc", back="b" * 500, source=FlashcardSource.MANUAL)

        with pytest.raises(ValidationError, match="cannot exceed 500"):
            Flashcard.create(
                user_id=USER, front="abc", back="b" * 501, source=FlashcardSource.MANUAL
            )

    def test_length_counts_text_as_submitted(self) -> None:
        card = Flashcard.create(
            user_id=USER, front=" a ", back="b" * 499 + " ", source=FlashcardSource.MANUAL
        )

        assert card.front == " a "
        with pytest.raises(ValidationError, match="cannot exceed 200"):
            Flashcard.create(
                user_id=USER, front=" " + "a" * 200, back="abc", source=FlashcardSource.MANUAL
            )

    @pytest.mark.parametrize("blank", ["   ", "\n\t  "])
    def test_blank_side_is_rejected(self, blank: str) -> None:
        with pytest.raises(ValidationError, match="Back cannot be blank"):
            Flashcard.create(user_id=USER, front="abc", back=blank, source=FlashcardSource.MANUAL)

    @pytest.mark.parametrize("source", [FlashcardSource.AI_FULL, FlashcardSource.AI_EDITED])
    def test_ai_source_requires_generation(self, source: FlashcardSource) -> None:
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            Flashcard.create(user_id=USER, front="abc", back="abc", source=source)

        assert exc_info.value.rule == "ai_flashcard_requires_generation"

    def test_manual_must_not_reference_generation(self) -> None:
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            Flashcard.create(
                user_id=USER,
                front="abc",
                back="abc",
                source=FlashcardSource.MANUAL,
                generated_id=GenerationId(3),
            )

        assert exc_info.value.rule == "manual_flashcard_has_no_generation"

    def test_unknown_source_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            Flashcard.create(
                user_id=USER,
                front="abc",
                back="abc",
                source="imported",  # type: ignore[arg-type]
            )


class TestUpdate:
    def test_update_front_and_back(self) -> None:
        card = _ai_card()

        card.update_front(" What is a protein? ")
        card.update_back("A chain of amino acids")

        assert card.front == " What is a protein? "
        assert card.back == "A chain of amino acids"

    def test_invalid_update_keeps_previous_value(self) -> None:
        card = _ai_card()

        with pytest.raises(ValidationError):
            card.update_back("no")

        assert card.back == "A biological catalyst"


class TestChangeSource:
    def test_ai_edited_needs_explicit_generation(self) -> None:
        card = _ai_card(generated_id=7)

        with pytest.raises(BusinessRuleViolationError):
            card.change_source(FlashcardSource.AI_EDITED)

        assert card.source is FlashcardSource.AI_FULL
        assert card.generated_id == GenerationId(7)

    def test_ai_edited_with_new_generation(self) -> None:
        card = _ai_card(generated_id=7)

        card.change_source(FlashcardSource.AI_EDITED, GenerationId(9))

        assert card.generated_id == GenerationId(9)

    def test_ai_edited_without_any_generation_fails(self) -> None:
        card = Flashcard.create(
            user_id=USER, front="abc", back="abc", source=FlashcardSource.MANUAL
        )

        with pytest.raises(BusinessRuleViolationError):
            card.change_source(FlashcardSource.AI_EDITED)

        assert card.source is FlashcardSource.MANUAL

    def test_manual_clears_generation(self) -> None:
        card = _ai_card()

        card.change_source(FlashcardSource.MANUAL)

        assert card.source is FlashcardSource.MANUAL
        assert card.generated_id is None

    def test_ai_full_cannot_be_set(self) -> None:
        card = _ai_card()

        with pytest.raises(ValidationError):
            card.change_source(FlashcardSource.AI_FULL)


def test_source_is_ai() -> None:
    assert not FlashcardSource.MANUAL.is_ai
    assert FlashcardSource.AI_FULL.is_ai
    assert FlashcardSource.AI_EDITED.is_ai
