"""Prompts and structured-output schema for flashcard generation."""

from flashforge.domain.learning.entities.flashcard import (
    BACK_MAX_LENGTH,
    BACK_MIN_LENGTH,
    FRONT_MAX_LENGTH,
    FRONT_MIN_LENGTH,
)
from flashforge.infrastructure.ai.types import ResponseFormat

FLASHCARD_SYSTEM_MESSAGE = f"""
You are an expert at writing study flashcards from educational text.
Follow these principles for every card:
1. Focused: each card tests ONE fact or concept
2. Precise: the question is unambiguous and has one clear answer
3. Standalone: the reader will not have the original text when reviewing,
   so never refer to "the text" or "the passage"
4. Effortful: the answer requires real recall, not a yes/no guess

Limits:
* front (question): {FRONT_MIN_LENGTH}-{FRONT_MAX_LENGTH} characters
* back (answer): {BACK_MIN_LENGTH}-{BACK_MAX_LENGTH} characters

Respond ONLY with JSON of the form:
{{"flashcards": [{{"front": "...", "back": "..."}}]}}
""".strip()

FLASHCARDS_RESPONSE_FORMAT = ResponseFormat(
    type="json_schema",
    json_schema={
        "name": "flashcards",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "flashcards": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "front": {"type": "string"},
                            "back": {"type": "string"},
                        },
                        "required": ["front", "back"],
                        "additionalProperties": False,
                    },
                }
            },
            "required": ["flashcards"],
            "additionalProperties": False,
        },
    },
)


def build_generation_prompt(source_text: str) -> str:
    """Build the user message asking for flashcards from ``source_text``."""
    return (
        "Generate between 5 and 15 flashcards covering the most important "
        "information in the following text.\n\n"
        f"Text:\n{source_text}"
    )
