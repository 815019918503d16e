"""Tests for FlashcardUseCase with mocked repositories."""

from dataclasses import replace
from itertools import count
from unittest.mock import MagicMock

import pytest

from flashforge.application.common.pagination import Pagination
from flashforge.application.learning.use_cases.dtos import (
    CreateFlashcardCommand,
    UpdateFlashcardCommand,
)
from flashforge.application.learning.use_cases.exceptions import FlashcardNotFoundError
from flashforge.application.learning.use_cases.flashcard_use_case import FlashcardUseCase
from flashforge.domain.common.exceptions import AuthorizationError
from flashforge.domain.common.value_objects.ids import FlashcardId, GenerationId, UserId
from flashforge.domain.learning.entities.flashcard import Flashcard, FlashcardSource
from flashforge.domain.learning.entities.generation import Generation
from flashforge.exceptions import ValidationError

USER_ID = "user-1"
OWN_GENERATION_ID = 1


def _own_generation(generation_id: GenerationId, user_id: UserId) -> Generation | None:
    if generation_id.value != OWN_GENERATION_ID or user_id.value != USER_ID:
        return None
    return Generation.create_with_id(
        id=generation_id,
        user_id=user_id,
        model_name="test/model",
        source_text_length=1200,
        source_text_hash="f" * 64,
        generated_count=3,
        duration_seconds=1.0,
        created_at=None,
        updated_at=None,
    )


def _stored_card(source: FlashcardSource = FlashcardSource.MANUAL) -> Flashcard:
    return Flashcard.create_with_id(
        id=FlashcardId(10),
        user_id=UserId(USER_ID),
        front="What is a gene?",
        back="A unit of heredity",
        source=source,
        created_at=None,
        updated_at=None,
        generated_id=None if source is FlashcardSource.MANUAL else GenerationId(OWN_GENERATION_ID),
    )


@pytest.fixture
def flashcard_repository() -> MagicMock:
    ids = count(100)
    repository = MagicMock()
    repository.save.side_effect = lambda card: (
        card if card.id.is_persisted else replace(card, id=FlashcardId(next(ids)))
    )
    return repository


@pytest.fixture
def generation_repository() -> MagicMock:
    repository = MagicMock()
    repository.find_by_id.side_effect = _own_generation
    return repository


@pytest.fixture
def use_case(flashcard_repository: MagicMock, generation_repository: MagicMock) -> FlashcardUseCase:
    return FlashcardUseCase(flashcard_repository, generation_repository)


class TestCreateFlashcards:
    def test_partial_failure_keeps_order(self, use_case: FlashcardUseCase) -> None:
        commands = [
            CreateFlashcardCommand("First question?", "First answer", "ai-full", OWN_GENERATION_ID),
            CreateFlashcardCommand("Second question?", "Second answer", "ai-full", 999),
            CreateFlashcardCommand("Third question?", "Third answer", "manual"),
        ]

        result = use_case.create_flashcards(commands, USER_ID)

        assert result.is_partial_success
        assert [card.front for card in result.data] == ["First question?", "Third question?"]
        assert [card.id.value for card in result.data] == [100, 101]
        assert len(result.failed) == 1
        assert result.failed[0].flashcard is commands[1]
        assert "999" in result.failed[0].error

    def test_all_saved(self, use_case: FlashcardUseCase) -> None:
        commands = [CreateFlashcardCommand("Question one?", "Answer one", "manual")]

        result = use_case.create_flashcards(commands, USER_ID)

        assert result.is_full_success
        assert not result.is_full_failure

    def test_invalid_items_do_not_reach_store(
        self, use_case: FlashcardUseCase, flashcard_repository: MagicMock
    ) -> None:
        commands = [
            CreateFlashcardCommand("Q?", "Too short front", "manual"),
            CreateFlashcardCommand("Valid question?", "Answer", "ai-edited"),
            CreateFlashcardCommand("Valid question?", "Answer", "imported"),
        ]

        result = use_case.create_flashcards(commands, USER_ID)

        assert result.is_full_failure
        assert len(result.failed) == 3
        flashcard_repository.save.assert_not_called()

    def test_unexpected_store_error_is_recorded_per_item(
        self, use_case: FlashcardUseCase, flashcard_repository: MagicMock
    ) -> None:
        saved = Flashcard.create(
            user_id=UserId(USER_ID),
            front="Question two?",
            back="Answer two",
            source=FlashcardSource.MANUAL,
        )
        flashcard_repository.save.side_effect = [RuntimeError("disk full"), saved]
        commands = [
            CreateFlashcardCommand("Question one?", "Answer one", "manual"),
            CreateFlashcardCommand("Question two?", "Answer two", "manual"),
        ]

        result = use_case.create_flashcards(commands, USER_ID)

        assert result.failed[0].error == "Unexpected error: disk full"
        assert result.data == [saved]


class TestCreateFlashcard:
    def test_foreign_generation_is_rejected(
        self, use_case: FlashcardUseCase, flashcard_repository: MagicMock
    ) -> None:
        command = CreateFlashcardCommand("Question?", "Answer", "ai-full", OWN_GENERATION_ID)

        with pytest.raises(AuthorizationError):
            use_case.create_flashcard(command, "someone-else")

        flashcard_repository.save.assert_not_called()


class TestListFlashcards:
    def test_passes_filters_to_repository(
        self, use_case: FlashcardUseCase, flashcard_repository: MagicMock
    ) -> None:
        flashcard_repository.find_page.return_value = ([], 0)
        pagination = Pagination(page=2, limit=5)

        result = use_case.list_flashcards(
            USER_ID, pagination, source="ai-edited", search="  cell  ", sort="created_at"
        )

        flashcard_repository.find_page.assert_called_once_with(
            UserId(USER_ID),
            pagination,
            source=FlashcardSource.AI_EDITED,
            search="cell",
            newest_first=False,
        )
        assert result.total == 0
        assert result.total_pages == 0

    def test_invalid_sort(self, use_case: FlashcardUseCase) -> None:
        with pytest.raises(ValidationError):
            use_case.list_flashcards(USER_ID, Pagination(), sort="front")

    def test_invalid_source(self, use_case: FlashcardUseCase) -> None:
        with pytest.raises(ValidationError):
            use_case.list_flashcards(USER_ID, Pagination(), source="imported")


class TestUpdateFlashcard:
    def test_empty_command_is_rejected(
        self, use_case: FlashcardUseCase, flashcard_repository: MagicMock
    ) -> None:
        with pytest.raises(ValidationError):
            use_case.update_flashcard(10, USER_ID, UpdateFlashcardCommand())

        flashcard_repository.find_by_id.assert_not_called()

    def test_generated_id_requires_source(self, use_case: FlashcardUseCase) -> None:
        with pytest.raises(ValidationError):
            use_case.update_flashcard(
                10, USER_ID, UpdateFlashcardCommand(generated_id=OWN_GENERATION_ID)
            )

    def test_missing_flashcard(
        self, use_case: FlashcardUseCase, flashcard_repository: MagicMock
    ) -> None:
        flashcard_repository.find_by_id.return_value = None

        with pytest.raises(FlashcardNotFoundError):
            use_case.update_flashcard(10, USER_ID, UpdateFlashcardCommand(front="New question?"))

    @pytest.mark.parametrize(
        "stored_source", [FlashcardSource.MANUAL, FlashcardSource.AI_FULL]
    )
    def test_ai_edited_without_generation_is_not_saved(
        self,
        use_case: FlashcardUseCase,
        flashcard_repository: MagicMock,
        stored_source: FlashcardSource,
    ) -> None:
        flashcard_repository.find_by_id.return_value = _stored_card(stored_source)

        with pytest.raises(ValidationError, match="generated_id is required"):
            use_case.update_flashcard(
                10, USER_ID, UpdateFlashcardCommand(front="New question?", source="ai-edited")
            )

        flashcard_repository.find_by_id.assert_not_called()
        flashcard_repository.save.assert_not_called()

    def test_ai_edited_with_foreign_generation_is_not_saved(
        self, use_case: FlashcardUseCase, flashcard_repository: MagicMock
    ) -> None:
        flashcard_repository.find_by_id.return_value = _stored_card()

        with pytest.raises(AuthorizationError):
            use_case.update_flashcard(
                10, USER_ID, UpdateFlashcardCommand(source="ai-edited", generated_id=42)
            )

        flashcard_repository.save.assert_not_called()

    def test_ai_edited_with_own_generation(
        self, use_case: FlashcardUseCase, flashcard_repository: MagicMock
    ) -> None:
        flashcard_repository.find_by_id.return_value = _stored_card()

        updated = use_case.update_flashcard(
            10,
            USER_ID,
            UpdateFlashcardCommand(source="ai-edited", generated_id=OWN_GENERATION_ID),
        )

        assert updated.source is FlashcardSource.AI_EDITED
        assert updated.generated_id == GenerationId(OWN_GENERATION_ID)
        flashcard_repository.save.assert_called_once()

    def test_content_edit_keeps_source(
        self, use_case: FlashcardUseCase, flashcard_repository: MagicMock
    ) -> None:
        flashcard_repository.find_by_id.return_value = _stored_card(FlashcardSource.AI_FULL)

        updated = use_case.update_flashcard(10, USER_ID, UpdateFlashcardCommand(back="New answer"))

        assert updated.back == "New answer"
        assert updated.source is FlashcardSource.AI_FULL


class TestDeleteFlashcard:
    def test_missing_flashcard(
        self, use_case: FlashcardUseCase, flashcard_repository: MagicMock
    ) -> None:
        flashcard_repository.delete.return_value = False

        with pytest.raises(FlashcardNotFoundError):
            use_case.delete_flashcard(10, USER_ID)
