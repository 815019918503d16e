import pytest

from flashforge.domain.common.exceptions import ValidationError
from flashforge.domain.common.value_objects.ids import GenerationId, UserId
from flashforge.domain.learning.entities.generation import Generation
from flashforge.domain.learning.entities.generation_error_log import GenerationErrorLog


def _start() -> Generation:
    return Generation.start(
        user_id=UserId("user-1"),
        model_name=" openai/gpt-4o-mini ",
        source_text_length=1200,
        source_text_hash="f" * 64,
    )


def test_start_records_zero_counts() -> None:
    """A fresh attempt has no proposals and no duration yet."""
    generation = _start()

    assert generation.id == GenerationId(0)
    assert generation.model_name == "openai/gpt-4o-mini"
    assert generation.generated_count == 0
    assert generation.duration_seconds == 0.0


def test_record_outcome() -> None:
    generation = _start()

    generation.record_outcome(generated_count=4, duration_seconds=2.5)

    assert generation.generated_count == 4
    assert generation.duration_seconds == 2.5


def test_record_outcome_rejects_negative_values() -> None:
    generation = _start()

    with pytest.raises(ValidationError):
        generation.record_outcome(generated_count=-1, duration_seconds=1.0)
    with pytest.raises(ValidationError):
        generation.record_outcome(generated_count=1, duration_seconds=-0.1)


def test_empty_hash_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Generation.start(
            user_id=UserId("user-1"),
            model_name="openai/gpt-4o-mini",
            source_text_length=1200,
            source_text_hash="",
        )


def test_error_log_truncates_long_fields() -> None:
    """Messages and codes are cut to the column sizes."""
    error_log = GenerationErrorLog.create(
        user_id=UserId("user-1"),
        error_message="x" * 5000,
        error_code="C" * 300,
        source_text_hash="f" * 64,
        source_text_length=1200,
    )

    assert len(error_log.error_message) == 1000
    assert len(error_log.error_code) == 100


def test_error_log_defaults_empty_message() -> None:
    error_log = GenerationErrorLog.create(
        user_id=UserId("user-1"),
        error_message="",
        error_code="",
        source_text_hash="f" * 64,
        source_text_length=1200,
    )

    assert error_log.error_message == "Unknown error"
    assert error_log.error_code == "UNKNOWN"
